"""``mcpdock health``, ``logs``, ``clean``, ``rebuild`` and ``fresh-start``."""

from __future__ import annotations

import asyncio
import sys
from collections.abc import Awaitable, Coroutine
from typing import Any

import click

from mcpdock.cli_commands import _actions, _deps
from mcpdock.cli_commands._output import console, failure, heading, success, warning
from mcpdock.protocols.errors import ProtocolError
from mcpdock.runtime.errors import CommandError, RuntimeToolError
from mcpdock.settings.models import ProjectSettings  # noqa: TC001
from mcpdock.verify.checks import CheckOutcome
from mcpdock.verify.suites import McpSuite


@click.command()
@click.pass_obj
def health(settings: ProjectSettings) -> None:
    """Check the image answers --help and tools/list."""
    suite = McpSuite(_deps.make_docker(), settings)
    heading("🏥 Health Check")

    async def _probe() -> bool:
        console.print("Testing Docker image health...")
        healthy = _report(await _guarded(suite.check_help()), "Docker image")
        console.print("Testing MCP JSON-RPC response...")
        responsive = _report(await _guarded(suite.check_tools_list()), "MCP server")
        return healthy and responsive

    if not asyncio.run(_probe()):
        sys.exit(1)


@click.command()
@click.pass_obj
def logs(settings: ProjectSettings) -> None:
    """Show logs from the running MCP container."""
    docker = _deps.make_docker()
    heading("📋 Container Logs")
    try:
        output = asyncio.run(docker.logs(settings.container.name))
    except CommandError:
        warning("No running container found")
        return
    except RuntimeToolError as exc:
        failure(str(exc))
        sys.exit(1)
    console.print(output, markup=False, highlight=False)


@click.command()
@click.pass_obj
def clean(settings: ProjectSettings) -> None:
    """Remove containers, the image and the MCP registration."""
    _run_steps(_actions.clean(settings))


@click.command()
@click.pass_obj
def rebuild(settings: ProjectSettings) -> None:
    """Clean, then rebuild the image."""

    async def _steps() -> None:
        await _actions.clean(settings)
        await _actions.setup_image(settings)

    _run_steps(_steps())


@click.command("fresh-start")
@click.pass_obj
def fresh_start(settings: ProjectSettings) -> None:
    """Clean, rebuild and register from scratch."""

    async def _steps() -> None:
        await _actions.clean(settings)
        await _actions.setup_image(settings)
        await _actions.register(settings)

    _run_steps(_steps())


def _run_steps(coro: Coroutine[Any, Any, None]) -> None:
    try:
        asyncio.run(coro)
    except RuntimeToolError as exc:
        failure(str(exc))
        sys.exit(1)


async def _guarded(check: Awaitable[CheckOutcome]) -> CheckOutcome:
    try:
        return await check
    except (RuntimeToolError, ProtocolError) as exc:
        return CheckOutcome.fail(str(exc))


def _report(outcome: CheckOutcome, subject: str) -> bool:
    if outcome.passed:
        success(f"{subject} healthy" + (f" ({outcome.detail})" if outcome.detail else ""))
    else:
        failure(f"{subject} unhealthy" + (f": {outcome.detail}" if outcome.detail else ""))
    return outcome.passed
