"""Folds per-patient assessments into the three reporting lists."""

from typing import Any, Iterable

from patient_risk.models.patient import RiskAssessment
from patient_risk.models.results import ResultSet


class ResultAggregator:
    """
    Appends ids in arrival order. An id may land in several lists, and in
    data_issue once per failing field. Nothing is deduplicated.
    """

    def __init__(self) -> None:
        self._high_risk: list[Any] = []
        self._fever_risk: list[Any] = []
        self._data_issue: list[Any] = []

    def add(self, assessment: RiskAssessment) -> None:
        pid = assessment.patient_id
        if assessment.is_high_risk:
            self._high_risk.append(pid)
        if assessment.is_fever_risk:
            self._fever_risk.append(pid)
        self._data_issue.extend(pid for _ in assessment.data_issues)

    def finalize(self) -> ResultSet:
        return ResultSet(
            high_risk=tuple(self._high_risk),
            fever_risk=tuple(self._fever_risk),
            data_issue=tuple(self._data_issue),
        )


def aggregate(assessments: Iterable[RiskAssessment]) -> ResultSet:
    """Aggregate a sequence of assessments in one go."""
    aggregator = ResultAggregator()
    for assessment in assessments:
        aggregator.add(assessment)
    return aggregator.finalize()
