"""mcpdock CLI entrypoint."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from mcpdock import __version__
from mcpdock.settings.errors import ConfigError
from mcpdock.settings.loader import load_settings


@click.group()
@click.version_option(version=__version__, prog_name="mcpdock")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Project file (defaults to ./mcpdock.yaml when present).",
)
@click.option("--verbose", "-v", is_flag=True, help="Log every external command.")
@click.option("--telemetry", is_flag=True, help="Enable OpenTelemetry tracing.")
@click.pass_context
def main(ctx: click.Context, config_path: Path | None, verbose: bool, telemetry: bool) -> None:
    """mcpdock — Context7 MCP server in Docker, registered with Claude Code."""
    _configure_logging(verbose)

    try:
        settings = load_settings(config_path)
    except ConfigError as exc:
        Console(stderr=True).print(f"[red]❌ Config error:[/red] {exc}")
        sys.exit(1)

    if telemetry or settings.telemetry.enabled:
        from mcpdock.utils.telemetry import configure_telemetry

        try:
            endpoint = settings.telemetry.otlp_endpoint
            configure_telemetry(export_to_console=endpoint is None, otlp_endpoint=endpoint)
        except ImportError as exc:
            Console(stderr=True).print(f"[red]❌ Telemetry:[/red] {exc}")
            sys.exit(1)

    ctx.obj = settings


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


# Register subcommands
from mcpdock.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
