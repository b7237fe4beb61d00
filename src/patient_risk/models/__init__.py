"""Data models for raw records, normalized patients and results."""

from patient_risk.models.accumulator import RecordAccumulator
from patient_risk.models.patient import NormalizedPatient, RiskAssessment
from patient_risk.models.raw import PagePayload, Pagination, RawPatientRecord
from patient_risk.models.results import ResultSet

__all__ = [
    "NormalizedPatient",
    "PagePayload",
    "Pagination",
    "RawPatientRecord",
    "RecordAccumulator",
    "ResultSet",
    "RiskAssessment",
]
