"""Window resolution and summary aggregation."""

from .aggregator import (
    SUMMARY_TYPE,
    AggregationResult,
    CompoundAccumulator,
    aggregate,
    aggregate_response,
    build_compound_records,
    build_daily_record,
    compound_summaries,
    compound_type_name,
    find_identifier_collisions,
)
from .durations import DurationFields, check_locale, describe_duration, humanize_duration
from .time_windows import DEFAULT_TIMESPAN, DateWindow, parse_timespan, resolve_window

__all__ = [
    # Time windows
    "DEFAULT_TIMESPAN",
    "DateWindow",
    "parse_timespan",
    "resolve_window",
    # Durations
    "DurationFields",
    "check_locale",
    "describe_duration",
    "humanize_duration",
    # Aggregation
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
