"""Normalized patient fields and per-patient risk outcome."""

from typing import Any, Optional

from pydantic import BaseModel, Field, computed_field

HIGH_RISK_THRESHOLD = 4


class NormalizedPatient(BaseModel):
    """
    Typed view of one raw record, built by the validator and consumed by the scorer.
    Numeric fields are None when absent or unparseable.
    """

    patient_id: Any = None

    age: Optional[float] = None
    systolic: Optional[float] = None
    diastolic: Optional[float] = None
    temperature: Optional[float] = None

    id_valid: bool = False
    name_valid: bool = False
    age_valid: bool = False
    gender_valid: bool = False
    blood_pressure_valid: bool = False
    temperature_valid: bool = False
    visit_date_valid: bool = False
    diagnosis_valid: bool = False
    medications_valid: bool = False


class RiskAssessment(BaseModel):
    """Risk outcome for one patient."""

    patient_id: Any = Field(..., description="Opaque identifier, may itself be invalid")

    age_points: int = 0
    blood_pressure_points: int = 0
    temperature_points: int = 0

    is_fever_risk: bool = False
    data_issues: list[str] = Field(
        default_factory=list,
        description="Failing field names in validation order",
    )
    explanations: list[str] = Field(
        default_factory=list,
        description="One validation note per field check, in rule order",
    )

    @computed_field
    @property
    def score(self) -> int:
        return self.age_points + self.blood_pressure_points + self.temperature_points

    @computed_field
    @property
    def is_high_risk(self) -> bool:
        return self.score >= HIGH_RISK_THRESHOLD

    @computed_field
    @property
    def has_data_issue(self) -> bool:
        return bool(self.data_issues)
