"""Pipeline orchestration: fetch all pages → validate → score → aggregate."""

import logging
from typing import Iterable, Optional

from patient_risk.aggregation import ResultAggregator
from patient_risk.config import Settings
from patient_risk.connectors.base import BaseConnector
from patient_risk.models.accumulator import RecordAccumulator
from patient_risk.models.patient import RiskAssessment
from patient_risk.models.raw import RawPatientRecord
from patient_risk.models.results import ResultSet
from patient_risk.scoring import RiskScorer
from patient_risk.validation import RecordValidator

logger = logging.getLogger(__name__)


def assess_record(
    raw: RawPatientRecord,
    validator: RecordValidator,
    scorer: RiskScorer,
) -> RiskAssessment:
    """Validate one raw record and score its normalized view."""
    result = validator.validate(raw)
    return scorer.score(result.patient, result.failed_fields, result.explanations)


def assess_many(
    records: Iterable[RawPatientRecord],
    *,
    strict_medications: bool = False,
) -> list[RiskAssessment]:
    """Per-patient assessments in source order."""
    validator = RecordValidator(strict_medications=strict_medications)
    scorer = RiskScorer()
    return [assess_record(r, validator, scorer) for r in records]


def assess_records(
    records: Iterable[RawPatientRecord],
    *,
    strict_medications: bool = False,
) -> ResultSet:
    """
    Validate, score and aggregate records one at a time.
    Pure: identical input always yields identical lists in identical order.
    """
    aggregator = ResultAggregator()
    for assessment in assess_many(records, strict_medications=strict_medications):
        aggregator.add(assessment)
    return aggregator.finalize()


def run_pipeline(
    connector: BaseConnector,
    settings: Optional[Settings] = None,
    *,
    accumulator: Optional[RecordAccumulator] = None,
) -> ResultSet:
    """
    Run the full pipeline: fetch every page → assess → aggregate.
    A page that cannot be fetched ends ingestion early; the records gathered
    before it are still assessed.
    """
    settings = settings or Settings()
    if accumulator is None:
        accumulator = RecordAccumulator()

    records = connector.fetch_all(
        page_size=settings.page_size,
        accumulator=accumulator,
        max_pages=settings.max_pages,
    )
    if not accumulator.complete:
        logger.warning(
            "Ingestion incomplete after %d pages; scoring %d records",
            accumulator.pages_fetched,
            len(records),
        )
    else:
        logger.info("Fetched %d records from %d pages", len(records), accumulator.pages_fetched)

    results = assess_records(records, strict_medications=settings.strict_medications)
    logger.info(
        "High risk: %d, fever: %d, data issues: %d",
        len(results.high_risk),
        len(results.fever_risk),
        len(results.data_issue),
    )
    return results
