"""Required-field rules: each takes the raw record dict and returns (passed, explanation)."""

from typing import Any

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

from .parsing import is_blank, parse_visit_date, to_number

GENDER_CODES = ("M", "F")


def _non_empty_string(data: dict[str, Any], field: str) -> tuple[bool, str]:
    value = data.get(field)
    if is_blank(value):
        return False, f"{field} missing"
    if not isinstance(value, str):
        return False, f"{field} is not a string ({type(value).__name__})"
    return True, f"{field} present"


def check_patient_id(data: dict[str, Any]) -> tuple[bool, str]:
    """Id must be present and not the empty string."""
    if is_blank(data.get(PATIENT_ID)):
        return False, "patient_id missing"
    return True, "patient_id present"


def check_name(data: dict[str, Any]) -> tuple[bool, str]:
    return _non_empty_string(data, NAME)


def check_age(data: dict[str, Any]) -> tuple[bool, str]:
    """Age must be a number or a numeric string."""
    value = data.get(AGE)
    if is_blank(value):
        return False, "age missing"
    if to_number(value) is None:
        return False, f"age not numeric: {value!r}"
    return True, "age numeric"


def check_gender(data: dict[str, Any]) -> tuple[bool, str]:
    value = data.get(GENDER)
    if is_blank(value):
        return False, "gender missing"
    if value not in GENDER_CODES:
        return False, f"gender not one of {GENDER_CODES}: {value!r}"
    return True, f"gender {value}"


def check_blood_pressure(data: dict[str, Any]) -> tuple[bool, str]:
    """
    Blood pressure must be a non-empty string.
    The systolic/diastolic split is not checked here; bad components only skip scoring.
    """
    return _non_empty_string(data, BLOOD_PRESSURE)


def check_temperature(data: dict[str, Any]) -> tuple[bool, str]:
    """Temperature must be numeric and non-zero; a zero reading counts as missing."""
    value = data.get(TEMPERATURE)
    if is_blank(value):
        return False, "temperature missing"
    number = to_number(value)
    if number is None:
        return False, f"temperature not numeric: {value!r}"
    if number == 0:
        return False, "temperature is zero"
    return True, "temperature numeric"


def check_visit_date(data: dict[str, Any]) -> tuple[bool, str]:
    value = data.get(VISIT_DATE)
    if is_blank(value):
        return False, "visit_date missing"
    if parse_visit_date(value) is None:
        return False, f"visit_date not a date: {value!r}"
    return True, "visit_date parsed"


def check_diagnosis(data: dict[str, Any]) -> tuple[bool, str]:
    return _non_empty_string(data, DIAGNOSIS)


def _medication_ok(med: Any) -> bool:
    return not is_blank(med) and isinstance(med, str)


def check_medications(data: dict[str, Any], strict: bool = False) -> tuple[bool, str]:
    """
    Medications must be a list. Only the first entry is checked unless strict is set;
    an empty list passes.
    """
    meds = data.get(MEDICATIONS)
    if not isinstance(meds, list):
        return False, "medications missing or not a list"
    if not meds:
        return True, "medications empty"
    to_check = meds if strict else meds[:1]
    for i, med in enumerate(to_check):
        if not _medication_ok(med):
            return False, f"medications[{i}] invalid: {med!r}"
    return True, "medications ok"
