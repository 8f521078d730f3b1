"""Loguru configuration with timing support.

- Colored console output on stderr
- Optional structured JSONL files (main log and timing log)
- Component-bound loggers and a timing context manager
"""

from __future__ import annotations

import sys
import time
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any

from loguru import logger

if TYPE_CHECKING:
    from collections.abc import Generator

__all__ = [
    "configure_loguru",
    "get_logger",
    "timing_context",
]


def configure_loguru(
    *,
    log_dir: Path | None = None,
    level: str = "INFO",
    rotation: str = "10 MB",
    retention: str = "10 days",
    enable_console: bool = True,
    enable_timing_logs: bool = True,
) -> None:
    """Configure loguru sinks.

    Parameters
    ----------
    log_dir
        Directory for JSONL log files (no files when None)
    level
        Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    rotation
        Log rotation policy (e.g., "10 MB", "1 day")
    retention
        Log retention policy (e.g., "10 days", "1 week")
    enable_console
        Enable console output
    enable_timing_logs
        Enable separate timing log file (only with log_dir)

    Example
    -------
    >>> from wakasource.observability.loguru_config import configure_loguru
    >>> configure_loguru(log_dir=Path("logs"), level="DEBUG")
    """
    # Remove default handler
    logger.remove()

    if enable_console:
        logger.add(
            sys.stderr,
            format="<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{extra[component]}</cyan> | "
            "<level>{message}</level>",
            level=level,
            colorize=True,
            backtrace=True,
            diagnose=False,
        )

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_dir / "wakasource.jsonl",
            format="{message}",
            level=level,
            rotation=rotation,
            retention=retention,
            serialize=True,
            backtrace=True,
            diagnose=False,
        )

        if enable_timing_logs:
            logger.add(
                log_dir / "timing.jsonl",
                format="{message}",
                level="DEBUG",
                rotation=rotation,
                retention=retention,
                serialize=True,
                filter=lambda record: record["extra"].get("timing", False),
            )

    logger.configure(extra={"component": "wakasource"})
    logger.debug("Loguru configured", log_dir=str(log_dir) if log_dir else None, level=level)


def get_logger(component: str = "wakasource"):
    """Get a logger bound to a component.

    Parameters
    ----------
    component
        Component name (pipeline, wakatime, cli)
    """
    return logger.bind(component=component)


@contextmanager
def timing_context(
    operation: str,
    *,
    component: str = "wakasource",
    trace_id: str | None = None,
    **metadata: Any,
) -> Generator[dict[str, Any], None, None]:
    """Time an operation and log start/end with the duration.

    Yields
    ------
    dict
        Context dictionary that can be updated with additional data

    Example
    -------
    >>> with timing_context("fetch_summaries", component="wakatime", trace_id="abc") as ctx:
    ...     response = client.fetch_window(window)
    ...     ctx["days"] = len(response.data)
    """
    start_time = time.perf_counter()
    context: dict[str, Any] = {}
    bound = logger.bind(component=component, timing=True, operation=operation, trace_id=trace_id)

    bound.debug(f"START: {operation}", phase="start", **metadata)

    try:
        yield context
    finally:
        duration_ms = (time.perf_counter() - start_time) * 1000
        bound.debug(
            f"END: {operation}",
            phase="end",
            duration_ms=duration_ms,
            **{**metadata, **context},
        )
