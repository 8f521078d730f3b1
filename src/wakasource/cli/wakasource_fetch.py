"""CLI commands: fetch a window of summaries, inspect the resolved window."""

from __future__ import annotations

from pathlib import Path

import click

from ..config.settings import Settings, generate_example_env
from ..core.errors import InvalidConfiguration
from ..observability.loguru_config import configure_loguru
from ..pipelines.summary_pipeline import create_summary_pipeline, log_loaded
from ..rollups.time_windows import resolve_window
from ..storage.node_store import JsonlNodeStore
from .cli_common import ExitCode, exit_code_for, output

__all__ = ["env_example_command", "fetch_command", "window_command"]


def _load_settings(ctx: click.Context, json_output: bool, **overrides) -> Settings:
    """Load settings or exit with CONFIG_ERROR."""
    try:
        return Settings.from_env(ctx.obj.get("env_file") if ctx.obj else None, **overrides)
    except InvalidConfiguration as exc:
        output(None, json_output=json_output, status="error", error=str(exc))
        ctx.exit(int(ExitCode.CONFIG_ERROR))


@click.command("fetch")
@click.option("--api-key", help="WakaTime API key (default: WAKATIME_API_KEY)")
@click.option("--base-url", help="API base URL (default: WAKATIME_BASE_URL)")
@click.option("--timespan", help="Relative window, e.g. 7day or 30day (default: WAKATIME_TIMESPAN)")
@click.option("--timezone", "timezone_name", help="Timezone for day boundaries (default: WAKATIME_TIMEZONE)")
@click.option("--locale", help="Locale for humanized durations")
@click.option(
    "--output",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=Path("wakatime-summaries.jsonl"),
    show_default=True,
    help="JSONL file receiving the emitted records",
)
@click.option("--log-dir", type=click.Path(file_okay=False, path_type=Path), help="Directory for JSONL logs")
@click.option("--json", "json_output", is_flag=True, help="Print the result as JSON")
@click.option("--verbose", "-v", is_flag=True, help="Debug logging")
@click.pass_context
def fetch_command(
    ctx: click.Context,
    api_key: str | None,
    base_url: str | None,
    timespan: str | None,
    timezone_name: str | None,
    locale: str | None,
    output_path: Path,
    log_dir: Path | None,
    json_output: bool,
    verbose: bool,
) -> None:
    """Fetch summaries, compound them and write the records."""
    settings = _load_settings(
        ctx,
        json_output,
        api_key=api_key,
        base_url=base_url,
        timespan=timespan,
        timezone=timezone_name,
        locale=locale,
        log_dir=log_dir,
        log_level="DEBUG" if verbose else None,
    )

    configure_loguru(log_dir=settings.log_dir, level=settings.log_level, enable_console=not json_output)
    log_loaded()

    store = JsonlNodeStore(output_path)
    pipeline = create_summary_pipeline(settings, store)
    result = pipeline.run()

    if not result.ok:
        output(None, json_output=json_output, status="error", error=f"{result.kind}: {result.message}")
        ctx.exit(int(exit_code_for(result.kind)))

    report = result.value
    try:
        store.flush()
    except OSError as exc:
        output(None, json_output=json_output, status="error", error=f"Cannot write {output_path}: {exc}")
        ctx.exit(int(ExitCode.IO_ERROR))

    data = report.to_dict()
    data["output"] = str(output_path)
    data["records"] = len(store)

    if not json_output:
        click.echo(f"✅ Wrote {len(store)} records to {output_path}")
    output(data, json_output=json_output, trace_id=report.trace_id)
    ctx.exit(int(ExitCode.SUCCESS))


@click.command("window")
@click.option("--timespan", default="7day", show_default=True, help="Relative window")
@click.option("--timezone", "timezone_name", default="UTC", show_default=True, help="Timezone for day boundaries")
@click.option("--json", "json_output", is_flag=True, help="Print the result as JSON")
@click.pass_context
def window_command(ctx: click.Context, timespan: str, timezone_name: str, json_output: bool) -> None:
    """Show the start/end dates a timespan resolves to."""
    try:
        window = resolve_window(timespan, timezone_str=timezone_name)
    except InvalidConfiguration as exc:
        output(None, json_output=json_output, status="error", error=str(exc))
        ctx.exit(int(ExitCode.CONFIG_ERROR))

    output(
        {"start": window.start, "end": window.end, "days": window.days, "timezone": window.timezone},
        json_output=json_output,
    )
    ctx.exit(int(ExitCode.SUCCESS))


@click.command("env-example")
@click.option("--write", "write_path", type=click.Path(dir_okay=False, path_type=Path), help="Write to this file")
def env_example_command(write_path: Path | None) -> None:
    """Print an example .env file."""
    click.echo(generate_example_env(write_path), nl=False)
