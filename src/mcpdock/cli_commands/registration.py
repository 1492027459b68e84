"""``mcpdock run``, ``remove`` and ``status`` — registration with Claude Code."""

from __future__ import annotations

import asyncio
import sys

import click

from mcpdock.cli_commands import _actions, _deps
from mcpdock.cli_commands._output import (
    console,
    failure,
    heading,
    print_containers,
    print_image,
    print_registration,
    success,
    warning,
)
from mcpdock.registry.models import RemoveOutcome
from mcpdock.runtime.errors import RuntimeToolError
from mcpdock.settings.models import ProjectSettings  # noqa: TC001


@click.command()
@click.pass_obj
def run(settings: ProjectSettings) -> None:
    """Register the MCP server with Claude Code."""
    try:
        asyncio.run(_actions.register(settings))
    except RuntimeToolError as exc:
        failure(str(exc))
        sys.exit(1)


@click.command()
@click.pass_obj
def remove(settings: ProjectSettings) -> None:
    """Remove the MCP registration (a missing one is not an error)."""
    service = _deps.make_registration_service()
    try:
        outcome = asyncio.run(service.deregister(settings.mcp_name))
    except RuntimeToolError as exc:
        failure(str(exc))
        sys.exit(1)

    if outcome is RemoveOutcome.REMOVED:
        success(f"Removed {settings.mcp_name}")
    else:
        warning("MCP not registered")


@click.command()
@click.pass_obj
def status(settings: ProjectSettings) -> None:
    """Show the image, running containers and registration."""
    docker = _deps.make_docker()
    service = _deps.make_registration_service()
    reference = settings.image.reference

    heading("📊 Docker MCP Context7 Status")

    async def _collect() -> None:
        console.print("\n[yellow]Docker Image:[/yellow]")
        print_image(await docker.inspect_image(reference), reference)

        console.print("\n[yellow]Running Containers:[/yellow]")
        print_containers(await docker.containers_for_image(reference))

        console.print("\n[yellow]MCP Registration:[/yellow]")
        print_registration(await service.status(settings.mcp_name))

    try:
        asyncio.run(_collect())
    except RuntimeToolError as exc:
        failure(str(exc))
        sys.exit(1)
