#!/usr/bin/env python3
"""Main CLI module for wakasource."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from .. import __version__
from .cli_common import ExitCode
from .wakasource_fetch import env_example_command, fetch_command, window_command

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
EPILOG = """
Examples:
  wakasource fetch                        # Last 7 days into wakatime-summaries.jsonl
  wakasource fetch --timespan 30day --json
  wakasource window --timespan "2 weeks"  # Show the resolved dates only
  wakasource env-example > .env
""".strip()


@click.group(
    context_settings=CONTEXT_SETTINGS,
    help="wakasource - WakaTime summaries source",
    epilog=EPILOG,
)
@click.option(
    "--env-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to .env file (default: ./.env)",
)
@click.version_option(__version__, prog_name="wakasource")
@click.pass_context
def cli(ctx: click.Context, env_file: Path | None) -> None:
    """Root command."""
    ctx.ensure_object(dict)
    ctx.obj["env_file"] = env_file


cli.add_command(fetch_command)
cli.add_command(window_command)
cli.add_command(env_example_command)


def main(args: list[str] | None = None) -> int:
    """Main entry point."""
    if args is None:
        args = sys.argv[1:]

    try:
        return cli.main(args=list(args), standalone_mode=False) or 0
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        return int(ExitCode.UNKNOWN_ERROR)
    except SystemExit as exc:
        return int(exc.code) if exc.code is not None else 0


if __name__ == "__main__":
    sys.exit(main())
