"""Final three-way partition of patients handed to submission."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ResultSet(BaseModel):
    """
    Ordered identifier lists for reporting.
    data_issue holds an id once per failing field check, so duplicates are expected.
    """

    model_config = ConfigDict(frozen=True)

    high_risk: tuple[Any, ...] = Field(default_factory=tuple)
    fever_risk: tuple[Any, ...] = Field(default_factory=tuple)
    data_issue: tuple[Any, ...] = Field(default_factory=tuple)

    def to_submission(self) -> dict[str, list[Any]]:
        """Body expected by the submit-assessment endpoint."""
        return {
            "high_risk_patients": list(self.high_risk),
            "fever_patients": list(self.fever_risk),
            "data_quality_issues": list(self.data_issue),
        }
