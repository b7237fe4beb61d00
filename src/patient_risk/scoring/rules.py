"""Sub-score rules for age, blood pressure and temperature.

Each rule takes already-normalized values. A missing or zero value contributes
nothing. Bands are checked highest first and the first match wins.
"""

from typing import Optional

from patient_risk.models.patient import HIGH_RISK_THRESHOLD

FEVER_THRESHOLD = 99.6
HIGH_FEVER_THRESHOLD = 101.0


def score_age(age: Optional[float]) -> int:
    """Over 65: 2, 40 to 65: 1, otherwise 0."""
    if not age:
        return 0
    if age > 65:
        return 2
    if age >= 40:
        return 1
    return 0


def score_blood_pressure(systolic: Optional[float], diastolic: Optional[float]) -> int:
    """
    Stage 2 (sys >= 140 or dia >= 90): 3
    Stage 1 (sys 130-139 or dia 80-89): 2
    Elevated (sys 120-129 and dia < 80): 1
    Normal or anything else: 0
    """
    if not systolic or not diastolic:
        return 0
    if systolic >= 140 or diastolic >= 90:
        return 3
    if 130 <= systolic <= 139 or 80 <= diastolic <= 89:
        return 2
    if 120 <= systolic <= 129 and diastolic < 80:
        return 1
    return 0


def score_temperature(temperature: Optional[float]) -> tuple[int, bool]:
    """Returns (points, is_fever). High fever (>= 101): 2, low fever (>= 99.6): 1."""
    if not temperature:
        return 0, False
    if temperature >= HIGH_FEVER_THRESHOLD:
        return 2, True
    if temperature >= FEVER_THRESHOLD:
        return 1, True
    return 0, False
