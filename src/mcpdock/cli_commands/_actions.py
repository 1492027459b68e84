"""Coroutines behind the lifecycle commands, shared by the composite ones."""

from __future__ import annotations

import shlex
from typing import TYPE_CHECKING

from mcpdock.cli_commands import _deps
from mcpdock.cli_commands._output import console, heading, print_image, success, warning
from mcpdock.registry.models import RemoveOutcome
from mcpdock.runtime.docker import spawn_command
from mcpdock.settings.dockerfile import render_dockerfile

if TYPE_CHECKING:
    from mcpdock.settings.models import ProjectSettings


async def setup_image(settings: ProjectSettings) -> None:
    """Build ``<image>:<tag>`` for the configured platforms and show its size."""
    docker = _deps.make_docker()
    reference = settings.image.reference
    heading(f"🔨 Building Docker image: {reference}")
    await docker.build(reference, render_dockerfile(settings.image), settings.image.platforms)
    success("Image built successfully")
    print_image(await docker.inspect_image(reference), reference)


async def register(settings: ProjectSettings) -> None:
    """Remove any stale registration, then register the spawn command."""
    service = _deps.make_registration_service()
    command = spawn_command(settings)
    heading("🚀 Registering MCP with Claude Code...")
    result = await service.register(settings.mcp_name, command, settings.scope)
    if not result.replaced:
        warning("MCP not previously registered")
    console.print(f"  {shlex.join(command)}", highlight=False)
    success("MCP registered successfully")
    console.print("[yellow]🔄 Start a NEW Claude Code chat session to access Context7 tools[/yellow]")
    console.print("[blue]💡 Test with: 'Use context7 to find React documentation'[/blue]")


async def clean(settings: ProjectSettings) -> None:
    """Remove the container, the image and the registration; absence is fine."""
    docker = _deps.make_docker()
    service = _deps.make_registration_service()
    heading("🧹 Cleaning up Docker artifacts...")
    await docker.stop(settings.container.name)
    await docker.remove_container(settings.container.name)
    if not await docker.remove_image(settings.image.reference):
        warning("Image not found")
    if await service.deregister(settings.mcp_name) is RemoveOutcome.NOT_FOUND:
        warning("MCP not registered")
    success("Cleanup complete")
