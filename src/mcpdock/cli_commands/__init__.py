"""CLI subcommand registration."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all subcommands on the CLI group."""
    from mcpdock.cli_commands.image import dockerfile, setup
    from mcpdock.cli_commands.ops import clean, fresh_start, health, logs, rebuild
    from mcpdock.cli_commands.registration import remove, run, status
    from mcpdock.cli_commands.tools import tools
    from mcpdock.cli_commands.verify import verify_cmd

    cli.add_command(setup)
    cli.add_command(dockerfile)
    cli.add_command(run)
    cli.add_command(remove)
    cli.add_command(status)
    cli.add_command(health)
    cli.add_command(logs)
    cli.add_command(clean)
    cli.add_command(rebuild)
    cli.add_command(fresh_start)
    cli.add_command(tools)
    cli.add_command(verify_cmd)
