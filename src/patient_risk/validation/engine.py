"""Record validator: runs field rules in a fixed order and builds the normalized view."""

from functools import partial
from typing import Any, Callable

from pydantic import BaseModel, Field

from patient_risk.connectors.ksense.constants import (
    AGE,
    BLOOD_PRESSURE,
    DIAGNOSIS,
    GENDER,
    MEDICATIONS,
    NAME,
    PATIENT_ID,
    TEMPERATURE,
    VISIT_DATE,
)
from patient_risk.models.patient import NormalizedPatient
from patient_risk.models.raw import RawPatientRecord

from .parsing import parse_blood_pressure, to_number
from .rules import (
    check_age,
    check_blood_pressure,
    check_diagnosis,
    check_gender,
    check_medications,
    check_name,
    check_patient_id,
    check_temperature,
    check_visit_date,
)

RuleFn = Callable[[dict[str, Any]], tuple[bool, str]]

# field -> NormalizedPatient validity flag
_FLAGS: dict[str, str] = {
    PATIENT_ID: "id_valid",
    NAME: "name_valid",
    AGE: "age_valid",
    GENDER: "gender_valid",
    BLOOD_PRESSURE: "blood_pressure_valid",
    TEMPERATURE: "temperature_valid",
    VISIT_DATE: "visit_date_valid",
    DIAGNOSIS: "diagnosis_valid",
    MEDICATIONS: "medications_valid",
}


class ValidationResult(BaseModel):
    """Normalized record plus the fields that failed, in rule order."""

    patient: NormalizedPatient
    failed_fields: list[str] = Field(default_factory=list)
    explanations: list[str] = Field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.failed_fields


class RecordValidator:
    """
    Checks every required field of a raw record independently.
    A record may fail several rules; none of them stops the others.
    """

    def __init__(self, strict_medications: bool = False):
        self._rules: list[tuple[str, RuleFn]] = [
            (PATIENT_ID, check_patient_id),
            (NAME, check_name),
            (AGE, check_age),
            (GENDER, check_gender),
            (BLOOD_PRESSURE, check_blood_pressure),
            (TEMPERATURE, check_temperature),
            (VISIT_DATE, check_visit_date),
            (DIAGNOSIS, check_diagnosis),
            (MEDICATIONS, partial(check_medications, strict=strict_medications)),
        ]

    def validate(self, raw: RawPatientRecord) -> ValidationResult:
        """Apply all rules and return the normalized record with its failures."""
        data = raw.data
        failed: list[str] = []
        explanations: list[str] = []
        flags: dict[str, bool] = {}

        for field, rule_fn in self._rules:
            passed, explanation = rule_fn(data)
            explanations.append(explanation)
            flags[_FLAGS[field]] = passed
            if not passed:
                failed.append(field)

        systolic, diastolic = parse_blood_pressure(data.get(BLOOD_PRESSURE))
        patient = NormalizedPatient(
            patient_id=data.get(PATIENT_ID),
            age=to_number(data.get(AGE)),
            systolic=systolic,
            diastolic=diastolic,
            temperature=to_number(data.get(TEMPERATURE)),
            **flags,
        )
        return ValidationResult(patient=patient, failed_fields=failed, explanations=explanations)
