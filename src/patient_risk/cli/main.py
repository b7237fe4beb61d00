"""Main CLI entry point."""

import argparse
import json
import logging
import sys
from pathlib import Path

logger = logging.getLogger(__name__)


def main() -> None:
    """Parse args and dispatch to subcommands."""
    parser = argparse.ArgumentParser(
        prog="patient-risk",
        description="Fetch patient records, score risk and report",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to settings YAML (env vars override it)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # fetch
    fetch_parser = subparsers.add_parser("fetch", help="Fetch raw patient records")
    fetch_parser.add_argument(
        "--page",
        type=int,
        default=None,
        help="Fetch only this page (default: all pages)",
    )
    fetch_parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Records per page for --page (default: single_page_limit setting)",
    )
    fetch_parser.add_argument(
        "--page-size",
        type=int,
        default=None,
        help="Records per page when fetching all pages (default: page_size setting)",
    )
    fetch_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write raw JSON to file (default: stdout)",
    )

    # assess
    assess_parser = subparsers.add_parser("assess", help="Score patients and build the result lists")
    assess_parser.add_argument(
        "--input",
        type=Path,
        default=None,
        help="Read raw records from a JSON file instead of the API",
    )
    assess_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write results to file",
    )
    assess_parser.add_argument(
        "--show-details",
        action="store_true",
        help="Output per-patient assessments with validation explanations instead of the submission body",
    )
    assess_parser.add_argument(
        "--submit",
        action="store_true",
        help="POST the result lists to the submission endpoint",
    )

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    from patient_risk.config import Settings
    from patient_risk.errors import ConfigError

    try:
        settings = Settings.load(args.config)
        if args.command == "fetch":
            _run_fetch(args, settings)
        elif args.command == "assess":
            _run_assess(args, settings)
        else:
            parser.print_help()
    except ConfigError as e:
        raise SystemExit(str(e))


def _write_or_print(output: str, path: Path | None, summary: str) -> None:
    if path:
        path.write_text(output, encoding="utf-8")
        print(f"{summary} (wrote to {path})")
    else:
        print(output)


def _run_fetch(args: argparse.Namespace, settings) -> None:
    """Run fetch command."""
    from patient_risk.connectors.ksense import KsenseConnector

    with KsenseConnector.from_settings(settings) as connector:
        if args.page is not None:
            limit = args.limit or settings.single_page_limit
            payload = connector.fetch_page(args.page, limit)
            if payload is None:
                print(f"Page {args.page} could not be fetched.", file=sys.stderr)
                raise SystemExit(1)
            records = payload.data
        else:
            page_size = args.page_size or settings.page_size
            raw = connector.fetch_all(page_size=page_size, max_pages=settings.max_pages)
            records = [r.data for r in raw]

    output = json.dumps(records, indent=2, default=str)
    _write_or_print(output, args.output, f"Fetched {len(records)} records")


def _load_records(path: Path) -> list:
    """Load raw records from a JSON list or a saved page payload."""
    from patient_risk.models.raw import RawPatientRecord

    data = json.loads(path.read_text())
    if isinstance(data, dict):
        data = data.get("data") or []
    return [RawPatientRecord(data=item if isinstance(item, dict) else {}) for item in data]


def _run_assess(args: argparse.Namespace, settings) -> None:
    """Run assess command. Live runs fetch every page first."""
    from patient_risk.aggregation import aggregate
    from patient_risk.connectors.ksense import KsenseConnector
    from patient_risk.pipeline import assess_many

    if args.input:
        records = _load_records(args.input)
    else:
        with KsenseConnector.from_settings(settings) as connector:
            records = connector.fetch_all(
                page_size=settings.page_size,
                max_pages=settings.max_pages,
            )

    if args.input and not records:
        print("No patient records to assess.", file=sys.stderr)
        raise SystemExit(1)
    if not records:
        logger.warning("No records fetched; reporting empty result lists")

    assessments = assess_many(records, strict_medications=settings.strict_medications)
    results = aggregate(assessments)

    if args.show_details:
        output_data = [a.model_dump(mode="json") for a in assessments]
    else:
        output_data = results.to_submission()
    output = json.dumps(output_data, indent=2, default=str)
    _write_or_print(
        output,
        args.output,
        f"Assessed {len(records)} patients: {len(results.high_risk)} high risk, "
        f"{len(results.fever_risk)} fever, {len(results.data_issue)} data issues",
    )

    if args.submit:
        with KsenseConnector.from_settings(settings) as connector:
            response = connector.submit_results(results)
        if response is not None:
            print(json.dumps(response, indent=2, default=str))


if __name__ == "__main__":
    main()
