"""Common CLI utilities: stable exit codes and JSON output."""

from __future__ import annotations

import json
from enum import IntEnum
from typing import Any

import click

__all__ = ["ExitCode", "exit_code_for", "output"]


class ExitCode(IntEnum):
    """Stable exit codes for CLI commands."""

    SUCCESS = 0  # Successful execution
    UPSTREAM_ERROR = 3  # Response carried an error field
    IO_ERROR = 5  # Network, HTTP or file error
    CONFIG_ERROR = 6  # Configuration error
    UNKNOWN_ERROR = 7  # Unknown/unexpected error


_EXIT_CODES_BY_KIND = {
    "InvalidConfiguration": ExitCode.CONFIG_ERROR,
    "UpstreamError": ExitCode.UPSTREAM_ERROR,
    "InvalidResponse": ExitCode.UPSTREAM_ERROR,
    "TransportFailure": ExitCode.IO_ERROR,
}


def exit_code_for(kind: str) -> ExitCode:
    """Map an ``Err`` kind to its exit code."""
    return _EXIT_CODES_BY_KIND.get(kind, ExitCode.UNKNOWN_ERROR)


def output(
    data: Any,
    *,
    json_output: bool,
    status: str = "success",
    error: str | None = None,
    trace_id: str | None = None,
) -> None:
    """Print a result either as a JSON envelope or as plain text.

    Args:
        data: Result data (ignored in text mode when ``error`` is set)
        json_output: Print a single JSON object
        status: "success" or "error"
        error: Error message
        trace_id: Trace ID for correlation
    """
    if json_output:
        result: dict[str, Any] = {"status": status}
        if trace_id:
            result["trace_id"] = trace_id
        if error:
            result["error"] = error
        else:
            result["data"] = data
        click.echo(json.dumps(result, ensure_ascii=False, default=str))
        return

    if error:
        click.echo(f"❌ {error}", err=True)
    elif isinstance(data, dict):
        for key, value in data.items():
            click.echo(f"   {key}: {value}")
    else:
        click.echo(str(data))
