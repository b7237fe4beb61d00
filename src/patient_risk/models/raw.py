"""Raw patient record and page payload as returned by the source API."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RawPatientRecord(BaseModel):
    """
    Untyped record from the patients endpoint.
    Any field may be absent, wrong-typed, or empty; nothing is checked here.
    """

    model_config = ConfigDict(extra="allow")

    data: dict[str, Any] = Field(default_factory=dict)


class Pagination(BaseModel):
    """Pagination metadata attached to every page."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    page: int | None = None
    limit: int | None = None
    total: int | None = None
    total_pages: int | None = Field(default=None, alias="totalPages")
    has_next: bool = Field(default=False, alias="hasNext")
    has_previous: bool = Field(default=False, alias="hasPrevious")

    @field_validator("page", "limit", "total", "total_pages", mode="before")
    @classmethod
    def _lenient_count(cls, value: Any) -> Any:
        # Only has_next drives pagination; bad counts must not reject the page
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str) and value.strip().isdigit():
            return int(value.strip())
        return None

    @field_validator("has_next", "has_previous", mode="before")
    @classmethod
    def _lenient_flag(cls, value: Any) -> bool:
        if isinstance(value, str):
            return value.strip().lower() in ("true", "1", "yes")
        return bool(value)


class PagePayload(BaseModel):
    """One page of the patients endpoint: records plus pagination."""

    model_config = ConfigDict(extra="allow")

    data: list[Any] = Field(default_factory=list)
    pagination: Pagination = Field(default_factory=Pagination)

    def records(self) -> list[RawPatientRecord]:
        """Wrap each item of the page as a RawPatientRecord; non-object items become empty records."""
        return [RawPatientRecord(data=item if isinstance(item, dict) else {}) for item in self.data]

    @field_validator("data", mode="before")
    @classmethod
    def _null_data(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("pagination", mode="before")
    @classmethod
    def _null_pagination(cls, value: Any) -> Any:
        return value if isinstance(value, (dict, Pagination)) else {}
