"""Pydantic models for the summaries payload and the emitted records.

Upstream payloads are validated here, at the input boundary. Unknown fields
are kept (``extra="allow"``) so pass-through records carry everything the
service returned.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

__all__ = [
    "CATEGORY_FIELDS",
    "NON_CATEGORY_FIELDS",
    "CategoryEntry",
    "CompoundRecord",
    "DailyRecord",
    "DailySummary",
    "GrandTotal",
    "RecordInternal",
    "SummariesResponse",
    "SummaryRange",
    "ValidationError",
]

# Breakdown dimensions reported for every day
CATEGORY_FIELDS: tuple[str, ...] = (
    "categories",
    "dependencies",
    "editors",
    "languages",
    "machines",
    "operating_systems",
    "projects",
)

# Describe the day as a whole, never compounded
NON_CATEGORY_FIELDS: frozenset[str] = frozenset({"grand_total", "range"})


class CategoryEntry(BaseModel):
    """One named item's usage within one day and one category.

    Display fields are whatever the service sent; the aggregator recomputes
    its own versions and never reads them.
    Numbers keep the type the service sent so pass-through records match it.
    """

    model_config = ConfigDict(extra="allow")

    name: str
    total_seconds: int | float = Field(0, ge=0)
    digital: str | None = None
    hours: int | None = None
    minutes: int | None = None
    seconds: int | None = None
    percent: int | float | None = None
    text: str | None = None


class GrandTotal(BaseModel):
    """Whole-day total (no ``name``)."""

    model_config = ConfigDict(extra="allow")

    total_seconds: int | float = Field(0, ge=0)
    digital: str | None = None
    hours: int | None = None
    minutes: int | None = None
    text: str | None = None


class SummaryRange(BaseModel):
    """Date range descriptor of a daily summary."""

    model_config = ConfigDict(extra="allow")

    start: str
    end: str | None = None
    date: str | None = None
    text: str | None = None
    timezone: str | None = None


class DailySummary(BaseModel):
    """One calendar day's report."""

    model_config = ConfigDict(extra="allow")

    range: SummaryRange
    grand_total: GrandTotal | None = None
    categories: list[CategoryEntry] = Field(default_factory=list)
    dependencies: list[CategoryEntry] = Field(default_factory=list)
    editors: list[CategoryEntry] = Field(default_factory=list)
    languages: list[CategoryEntry] = Field(default_factory=list)
    machines: list[CategoryEntry] = Field(default_factory=list)
    operating_systems: list[CategoryEntry] = Field(default_factory=list)
    projects: list[CategoryEntry] = Field(default_factory=list)

    def category_collections(self) -> dict[str, list[CategoryEntry]]:
        """Return every breakdown collection of the day, keyed by category.

        Known categories come first in declaration order, then any extra
        list-of-entries field the service added.
        """
        collections: dict[str, list[CategoryEntry]] = {key: getattr(self, key) for key in CATEGORY_FIELDS}

        for key, value in (self.model_extra or {}).items():
            if key in NON_CATEGORY_FIELDS or not isinstance(value, list):
                continue
            if not all(isinstance(item, dict) and "name" in item for item in value):
                continue
            collections[key] = [CategoryEntry.model_validate(item) for item in value]

        return collections

    def payload(self) -> dict[str, Any]:
        """JSON-compatible dump of the fields the service actually sent."""
        return self.model_dump(mode="json", exclude_unset=True)


class SummariesResponse(BaseModel):
    """Body of ``GET /users/current/summaries``."""

    model_config = ConfigDict(extra="allow")

    data: list[DailySummary] = Field(default_factory=list)
    error: str | None = None
    start: str | None = None
    end: str | None = None
    show_upgrade_modal: bool | None = None

    @field_validator("data", mode="before")
    @classmethod
    def validate_data(cls, v: Any) -> Any:
        """Treat an explicit ``null`` as an empty window."""
        return [] if v is None else v

    @property
    def has_error(self) -> bool:
        return bool(self.error)


class RecordInternal(BaseModel):
    """Store bookkeeping: declared type name and content fingerprint."""

    type: str
    content_digest: str


class DailyRecord(DailySummary):
    """Pass-through record for one day: every summary field plus identity."""

    id: str
    parent: str | None = None
    children: list[str] = Field(default_factory=list)
    internal: RecordInternal

    def to_node(self) -> dict[str, Any]:
        """Flatten into the dict handed to the store."""
        return self.model_dump(mode="json", exclude_unset=True)


class CompoundRecord(BaseModel):
    """Compounded total of one (category, name) pair across the window."""

    id: str
    parent: str | None = None
    children: list[str] = Field(default_factory=list)
    internal: RecordInternal

    category: str
    name: str
    total_seconds: float
    total_type_seconds: float
    percent: float
    digital: str
    hours: int
    minutes: int
    seconds: int
    text: str

    def to_node(self) -> dict[str, Any]:
        """Flatten into the dict handed to the store."""
        return self.model_dump(mode="json")
