"""Summary aggregation: daily pass-through and per-category compounding.

Fold N daily summaries into one total per (category, name) pair, derive
display fields and percentage shares, and build deterministically
identified records. Nothing here talks to the store; emission is the
caller's job.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ..core.errors import InvalidConfiguration, InvalidResponse, UpstreamError
from ..core.idempotency import create_content_digest, normalize_identifier_part
from ..core.result import Err, Ok, Result, err_from_exception
from ..core.schemas import (
    CompoundRecord,
    DailyRecord,
    DailySummary,
    RecordInternal,
    SummariesResponse,
    ValidationError,
)
from ..core.time import format_summary_date
from .durations import check_locale, describe_duration

if TYPE_CHECKING:
    from collections.abc import Iterable

__all__ = [
    "SUMMARY_TYPE",
    "AggregationResult",
    "CompoundAccumulator",
    "aggregate",
    "aggregate_response",
    "build_compound_records",
    "build_daily_record",
    "compound_summaries",
    "compound_type_name",
    "find_identifier_collisions",
]

SUMMARY_TYPE = "WAKA_TIME_SUMMARY"


@dataclass
class CompoundAccumulator:
    """Running total for one name within one category."""

    name: str
    total_seconds: float = 0.0
    days_seen: int = 0

    def add(self, seconds: float) -> None:
        self.total_seconds += seconds
        self.days_seen += 1


@dataclass
class AggregationResult:
    """Records produced by one aggregation run."""

    daily_records: list[DailyRecord] = field(default_factory=list)
    compound_records: list[CompoundRecord] = field(default_factory=list)

    @property
    def records(self) -> list[DailyRecord | CompoundRecord]:
        """Daily records first, then compound records."""
        return [*self.daily_records, *self.compound_records]

    def category_totals(self) -> dict[str, float]:
        """``total_type_seconds`` per category."""
        totals: dict[str, float] = {}
        for record in self.compound_records:
            totals[record.category] = record.total_type_seconds
        return totals

    def to_dict(self) -> dict[str, Any]:
        return {
            "daily_count": len(self.daily_records),
            "compound_count": len(self.compound_records),
            "category_totals": self.category_totals(),
        }


def compound_type_name(category: str) -> str:
    """Declared type name of compound records, e.g. ``WAKA_TIME_SUMMARY_LANGUAGES``."""
    return f"{SUMMARY_TYPE}_{category.upper()}"


def build_daily_record(summary: DailySummary) -> DailyRecord:
    """Wrap one day's summary with its identity and fingerprint.

    The identifier depends only on the day's normalized start date, so the
    same day always maps to the same record.
    """
    payload = summary.payload()
    day = format_summary_date(summary.range.start)

    return DailyRecord.model_validate(
        {
            **payload,
            "id": f"{SUMMARY_TYPE}-{day}",
            "parent": None,
            "children": [],
            "internal": {
                "type": SUMMARY_TYPE,
                "content_digest": create_content_digest(payload),
            },
        }
    )


def compound_summaries(summaries: Iterable[DailySummary]) -> dict[str, dict[str, CompoundAccumulator]]:
    """Sum ``total_seconds`` per (category, name) across all days.

    Returns a fresh two-level mapping category -> name -> accumulator, in
    first-seen order. Names missing on some days only count the days they
    appear on.
    """
    compounded: dict[str, dict[str, CompoundAccumulator]] = {}

    for summary in summaries:
        for category, entries in summary.category_collections().items():
            by_name = compounded.setdefault(category, {})
            for entry in entries:
                accumulator = by_name.get(entry.name)
                if accumulator is None:
                    accumulator = by_name[entry.name] = CompoundAccumulator(name=entry.name)
                accumulator.add(entry.total_seconds)

    return compounded


def build_compound_records(
    compounded: dict[str, dict[str, CompoundAccumulator]],
    locale: str = "en",
) -> list[CompoundRecord]:
    """Derive percent and duration fields for every compounded entry.

    A category whose total is zero gets 0% for all its entries instead of
    a division error.
    """
    records: list[CompoundRecord] = []

    for category, by_name in compounded.items():
        total_type_seconds = sum(acc.total_seconds for acc in by_name.values())
        type_name = compound_type_name(category)

        for accumulator in by_name.values():
            if total_type_seconds > 0:
                percent = accumulator.total_seconds / total_type_seconds * 100
            else:
                percent = 0.0

            fields = describe_duration(accumulator.total_seconds, locale=locale)
            data = {
                "name": accumulator.name,
                "total_seconds": accumulator.total_seconds,
                "digital": fields.digital,
                "hours": fields.hours,
                "minutes": fields.minutes,
                "seconds": fields.seconds,
                "percent": percent,
                "text": fields.text,
            }

            records.append(
                CompoundRecord(
                    id=f"{type_name}-{normalize_identifier_part(accumulator.name)}",
                    internal=RecordInternal(type=type_name, content_digest=create_content_digest(data)),
                    category=category,
                    total_type_seconds=total_type_seconds,
                    **data,
                )
            )

    return records


def aggregate(summaries: Iterable[DailySummary], locale: str = "en") -> AggregationResult:
    """Build daily and compound records for a window of summaries.

    Parameters
    ----------
    summaries
        Daily summaries of the window (any order)
    locale
        Locale for humanized duration text

    Returns
    -------
    AggregationResult
        One daily record per summary and one compound record per
        (category, name) pair
    """
    summaries = list(summaries)

    daily_records = [build_daily_record(summary) for summary in summaries]
    compound_records = build_compound_records(compound_summaries(summaries), locale=locale)

    return AggregationResult(daily_records=daily_records, compound_records=compound_records)


def aggregate_response(response: SummariesResponse | dict[str, Any], locale: str = "en") -> Result:
    """Validate a summaries response and aggregate it.

    The locale is checked first, then the ``error`` field, so neither a
    configuration problem nor an upstream error produces partial output.

    Returns
    -------
    Result
        ``Ok(AggregationResult)`` or ``Err(kind, message)``
    """
    try:
        check_locale(locale)
    except InvalidConfiguration as exc:
        return err_from_exception(exc)

    if isinstance(response, dict):
        error = response.get("error")
        if error:
            return Err(kind=UpstreamError.kind, message=str(error))
        try:
            response = SummariesResponse.model_validate(response)
        except ValidationError as exc:
            return Err(kind=InvalidResponse.kind, message=str(exc))

    if response.has_error:
        return Err(kind=UpstreamError.kind, message=str(response.error))

    try:
        return Ok(aggregate(response.data, locale=locale))
    except ValueError as exc:
        return Err(kind=InvalidResponse.kind, message=str(exc))


def find_identifier_collisions(records: Iterable[CompoundRecord]) -> dict[str, list[str]]:
    """Find compound identifiers shared by more than one distinct name.

    Stripping non-alphanumeric characters is lossy ("C++" and "C" both
    become "C"); the store keeps whichever record is written last.

    Returns
    -------
    dict[str, list[str]]
        Identifier -> colliding names, in emission order
    """
    names_by_id: dict[str, list[str]] = defaultdict(list)
    for record in records:
        if record.name not in names_by_id[record.id]:
            names_by_id[record.id].append(record.name)

    return {record_id: names for record_id, names in names_by_id.items() if len(names) > 1}
