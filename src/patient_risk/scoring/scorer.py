"""Deterministic per-patient risk scorer."""

from typing import Iterable

from patient_risk.models.patient import NormalizedPatient, RiskAssessment

from .rules import score_age, score_blood_pressure, score_temperature


class RiskScorer:
    """Sums age, blood-pressure and temperature points for one normalized record."""

    def score(
        self,
        patient: NormalizedPatient,
        data_issues: Iterable[str] = (),
        explanations: Iterable[str] = (),
    ) -> RiskAssessment:
        temperature_points, is_fever = score_temperature(patient.temperature)
        return RiskAssessment(
            patient_id=patient.patient_id,
            age_points=score_age(patient.age),
            blood_pressure_points=score_blood_pressure(patient.systolic, patient.diastolic),
            temperature_points=temperature_points,
            is_fever_risk=is_fever,
            data_issues=list(data_issues),
            explanations=list(explanations),
        )
