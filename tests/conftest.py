"""Shared fixtures: summary payload builders and loguru reset."""

from __future__ import annotations

from typing import Any

import pytest
from loguru import logger


def make_summary(day: str, **categories: dict[str, float]) -> dict[str, Any]:
    """Build one day's summary payload the way the API returns it.

    ``categories`` maps a category key to ``{name: total_seconds}``.
    """
    total = sum(categories.get("languages", {}).values())
    summary: dict[str, Any] = {
        "range": {
            "date": day,
            "start": f"{day}T00:00:00Z",
            "end": f"{day}T23:59:59Z",
            "text": day,
            "timezone": "UTC",
        },
        "grand_total": {
            "total_seconds": total,
            "digital": "0:00",
            "hours": 0,
            "minutes": 0,
            "text": "0 secs",
        },
    }
    for category, entries in categories.items():
        summary[category] = [
            {
                "name": name,
                "total_seconds": seconds,
                "digital": "0:00:00",
                "hours": 0,
                "minutes": 0,
                "seconds": 0,
                "percent": 0.0,
                "text": "0 secs",
            }
            for name, seconds in entries.items()
        ]
    return summary


def make_response(*summaries: dict[str, Any], error: str | None = None) -> dict[str, Any]:
    """Wrap summaries in a response body."""
    body: dict[str, Any] = {"data": list(summaries)}
    if summaries:
        body["start"] = summaries[0]["range"]["start"]
        body["end"] = summaries[-1]["range"]["end"]
    if error is not None:
        body["error"] = error
    return body


@pytest.fixture(autouse=True)
def reset_loguru():
    """Drop sinks added by tests (they may point at captured streams)."""
    yield
    logger.remove()


@pytest.fixture
def two_day_payload() -> dict[str, Any]:
    """Two days across languages, editors and projects."""
    return make_response(
        make_summary(
            "2025-10-06",
            languages={"Rust": 3600},
            editors={"Neovim": 3600},
            projects={"wakasource": 2400, "dotfiles": 1200},
        ),
        make_summary(
            "2025-10-07",
            languages={"Rust": 1800, "Go": 600},
            editors={"Neovim": 1800, "VS Code": 600},
            projects={"wakasource": 2400},
        ),
    )
