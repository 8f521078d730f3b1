"""Summary pipeline: one-shot orchestration of a source run.

resolve window -> fetch summaries -> aggregate -> emit records

The pipeline holds no state between runs. Records reach the store only
after the whole window was fetched and aggregated, so a failed run emits
nothing.
"""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any

from .. import __version__
from ..adapters.wakatime.client import DEFAULT_BASE_URL, WakaTimeClient
from ..core.errors import InvalidConfiguration, WakaSourceError
from ..core.result import Err, Ok, Result, err_from_exception
from ..observability.loguru_config import get_logger, timing_context
from ..rollups.aggregator import AggregationResult, aggregate_response, find_identifier_collisions
from ..rollups.durations import check_locale
from ..rollups.time_windows import DEFAULT_TIMESPAN, DateWindow, resolve_window

if TYPE_CHECKING:
    from ..config.settings import Settings
    from ..storage.node_store import NodeStore

__all__ = [
    "PACKAGE_NAME",
    "PipelineReport",
    "SummaryPipeline",
    "SummaryPipelineConfig",
    "create_summary_pipeline",
    "log_loaded",
]

PACKAGE_NAME = "wakasource"

log = get_logger("pipeline")


@dataclass
class SummaryPipelineConfig:
    """Configuration for the summary pipeline."""

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    timespan: str = DEFAULT_TIMESPAN
    timezone: str = "UTC"
    timeout: float = 30.0
    locale: str = "en"


@dataclass
class PipelineReport:
    """Outcome of a successful run."""

    trace_id: str
    window: DateWindow
    daily_count: int
    compound_count: int
    duration_ms: float
    collisions: dict[str, list[str]] = field(default_factory=dict)
    category_totals: dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "trace_id": self.trace_id,
            "start": self.window.start,
            "end": self.window.end,
            "timespan": self.window.timespan,
            "daily_count": self.daily_count,
            "compound_count": self.compound_count,
            "duration_ms": self.duration_ms,
            "collisions": self.collisions,
            "category_totals": self.category_totals,
        }


def log_loaded() -> None:
    """Log the package name and version."""
    log.info(f"Loaded {PACKAGE_NAME}:{__version__}")


class SummaryPipeline:
    """Fetch one window of summaries and hand the records to a store.

    Example:
        >>> store = MemoryNodeStore()
        >>> pipeline = SummaryPipeline(SummaryPipelineConfig(api_key="waka_..."), store=store)
        >>> result = pipeline.run()
        >>> if result.ok:
        ...     print(result.value.compound_count)
    """

    def __init__(
        self,
        config: SummaryPipelineConfig,
        *,
        store: NodeStore,
        client: WakaTimeClient | None = None,
    ) -> None:
        """Initialize summary pipeline.

        Parameters
        ----------
        config
            Pipeline configuration
        store
            Destination for emitted records
        client
            WakaTime client (default: built from config)
        """
        self.config = config
        self.store = store
        self.client = client or WakaTimeClient(
            config.api_key,
            base_url=config.base_url,
            timeout=config.timeout,
        )

    def resolve(self, now: datetime | None = None) -> DateWindow:
        """Resolve the configured timespan against ``now``."""
        return resolve_window(self.config.timespan, now=now, timezone_str=self.config.timezone)

    def collect(self, now: datetime | None = None, trace_id: str | None = None) -> Result:
        """Resolve, fetch and aggregate without emitting anything.

        Returns
        -------
        Result
            ``Ok((DateWindow, AggregationResult))`` or ``Err``
        """
        trace_id = trace_id or str(uuid.uuid4())

        if not self.config.api_key:
            return Err(kind=InvalidConfiguration.kind, message="WakaTime API key is required")

        try:
            check_locale(self.config.locale)
            window = self.resolve(now)
        except WakaSourceError as exc:
            return err_from_exception(exc)

        log.bind(trace_id=trace_id).info(f"Getting Information from WakaTime from {window.start} to {window.end}")

        try:
            with timing_context("fetch_summaries", component="wakatime", trace_id=trace_id) as ctx:
                response = self.client.fetch_window(window)
                ctx["days"] = len(response.data)
        except WakaSourceError as exc:
            return err_from_exception(exc)

        aggregated = aggregate_response(response, locale=self.config.locale)
        if not aggregated.ok:
            return aggregated

        return Ok((window, aggregated.value))

    def emit(self, aggregation: AggregationResult) -> int:
        """Hand every record to the store, daily records first."""
        emitted = 0
        for record in aggregation.records:
            self.store.create_node(record.to_node())
            emitted += 1
        return emitted

    def run(self, now: datetime | None = None) -> Result:
        """Execute one source run.

        Parameters
        ----------
        now
            Reference time for the window (default: current time)

        Returns
        -------
        Result
            ``Ok(PipelineReport)`` or ``Err(kind, message)``
        """
        trace_id = str(uuid.uuid4())
        start_time = time.time()
        bound = log.bind(trace_id=trace_id)

        bound.debug(f"Pipeline started (timespan={self.config.timespan})")

        collected = self.collect(now=now, trace_id=trace_id)
        if not collected.ok:
            bound.error(f"Pipeline failed: {collected.kind}: {collected.message}")
            return collected

        window, aggregation = collected.value

        collisions = find_identifier_collisions(aggregation.compound_records)
        for record_id, names in collisions.items():
            bound.warning(f"Identifier collision on {record_id}: {names}; last write wins")

        self.emit(aggregation)

        report = PipelineReport(
            trace_id=trace_id,
            window=window,
            daily_count=len(aggregation.daily_records),
            compound_count=len(aggregation.compound_records),
            duration_ms=(time.time() - start_time) * 1000,
            collisions=collisions,
            category_totals=aggregation.category_totals(),
        )

        bound.info(
            f"Emitted {report.daily_count} daily and {report.compound_count} compound records "
            f"for {window.start}..{window.end}"
        )

        return Ok(report)


def create_summary_pipeline(settings: Settings, store: NodeStore) -> SummaryPipeline:
    """Build a pipeline from loaded settings."""
    config = SummaryPipelineConfig(
        api_key=settings.api_key,
        base_url=settings.base_url,
        timespan=settings.timespan,
        timezone=settings.timezone,
        timeout=settings.timeout,
        locale=settings.locale,
    )
    return SummaryPipeline(config, store=store)
