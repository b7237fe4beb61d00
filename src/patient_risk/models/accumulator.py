"""Caller-owned accumulator for records gathered across pages."""

from pydantic import BaseModel, Field

from patient_risk.models.raw import PagePayload, RawPatientRecord


class RecordAccumulator(BaseModel):
    """
    Collects raw records page by page.
    complete is False when pagination stopped because a page could not be fetched.
    """

    records: list[RawPatientRecord] = Field(default_factory=list)
    pages_fetched: int = 0
    complete: bool = True

    def add_page(self, payload: PagePayload) -> None:
        self.records.extend(payload.records())
        self.pages_fetched += 1

    def mark_incomplete(self) -> None:
        self.complete = False
