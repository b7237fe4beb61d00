"""Risk scoring: sub-score rules and the per-patient scorer."""

from .rules import HIGH_RISK_THRESHOLD, score_age, score_blood_pressure, score_temperature
from .scorer import RiskScorer

__all__ = [
    "HIGH_RISK_THRESHOLD",
    "RiskScorer",
    "score_age",
    "score_blood_pressure",
    "score_temperature",
]
