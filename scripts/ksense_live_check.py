#!/usr/bin/env python3
"""Quick live check of the Ksense patients endpoint with retry.

Run:
  PATIENT_RISK_API_KEY=... poetry run python scripts/ksense_live_check.py        # page 1
  PATIENT_RISK_API_KEY=... poetry run python scripts/ksense_live_check.py 3      # page 3
  PATIENT_RISK_API_KEY=... poetry run python scripts/ksense_live_check.py all    # every page (slow)
"""

import logging
import sys

from patient_risk.config import Settings
from patient_risk.connectors.ksense import KsenseConnector
from patient_risk.models.accumulator import RecordAccumulator
from patient_risk.pipeline import assess_records


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    page_arg = sys.argv[1] if len(sys.argv) > 1 else "1"
    settings = Settings.load()

    with KsenseConnector.from_settings(settings) as connector:
        if page_arg == "all":
            print("Fetching every page (this may take a while)...")
            acc = RecordAccumulator()
            records = connector.fetch_all(page_size=settings.page_size, accumulator=acc)
            print(f"Got {len(records)} records from {acc.pages_fetched} pages (complete={acc.complete})")
        else:
            page = int(page_arg)
            print(f"Fetching page {page}...")
            payload = connector.fetch_page(page, settings.single_page_limit)
            if payload is None:
                print("\n⚠️ Page could not be fetched. Check logs for status codes.")
                return
            records = payload.records()
            print(f"Got {len(records)} records (hasNext={payload.pagination.has_next})")

    for i, r in enumerate(records[:5], 1):
        print(f"  {i}. {r.data.get('patient_id', 'N/A')} {r.data.get('name', 'N/A')}")
    if records:
        results = assess_records(records, strict_medications=settings.strict_medications)
        print(f"\n✅ {len(results.high_risk)} high risk, {len(results.fever_risk)} fever, "
              f"{len(results.data_issue)} data issues")


if __name__ == "__main__":
    main()
