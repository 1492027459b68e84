"""``mcpdock tools`` — list and call tools on the containerised server."""

from __future__ import annotations

import asyncio
import json
import sys
from typing import TYPE_CHECKING, Any

import click

from mcpdock.cli_commands._output import console, failure, print_tools_table, warning
from mcpdock.protocols.errors import MCPServerError, ProtocolError
from mcpdock.protocols.mcp.models import MCPToolDef, ToolCallResult
from mcpdock.runtime.docker import spawn_command
from mcpdock.settings.models import ProjectSettings  # noqa: TC001

if TYPE_CHECKING:
    from mcpdock.protocols.mcp.client import MCPClient


def _client(settings: ProjectSettings, timeout: float) -> MCPClient:
    from mcpdock.protocols.mcp.client import MCPClient

    command = spawn_command(settings, container_name=f"{settings.container.name}-cli")
    return MCPClient(command, timeout=timeout)


@click.group()
def tools() -> None:
    """Discover and call tools."""


@tools.command("list")
@click.option("--timeout", type=float, default=30.0, show_default=True, help="Seconds per request.")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_obj
def list_tools(settings: ProjectSettings, timeout: float, as_json: bool) -> None:
    """List the tools the server advertises."""

    async def _list() -> list[MCPToolDef]:
        async with _client(settings, timeout) as client:
            return await client.list_tools()

    try:
        found = asyncio.run(_list())
    except ProtocolError as exc:
        failure(f"Discovery error: {exc}")
        sys.exit(1)

    if as_json:
        console.print_json(json.dumps([t.model_dump(by_alias=True) for t in found]))
        return
    if not found:
        warning("No tools discovered.")
        return
    print_tools_table(found)


@tools.command("call")
@click.argument("name")
@click.option(
    "--arg",
    "-a",
    "args",
    multiple=True,
    metavar="KEY=VALUE",
    help="Tool argument; VALUE is parsed as JSON when possible.",
)
@click.option("--timeout", type=float, default=60.0, show_default=True, help="Seconds per request.")
@click.pass_obj
def call_tool(settings: ProjectSettings, name: str, args: tuple[str, ...], timeout: float) -> None:
    """Call tool NAME, e.g. ``tools call resolve-library-id -a libraryName=react``."""
    try:
        arguments = parse_arguments(args)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--arg") from exc

    async def _call() -> ToolCallResult:
        async with _client(settings, timeout) as client:
            return await client.call_tool(name, arguments)

    try:
        result = asyncio.run(_call())
    except MCPServerError as exc:
        failure(f"Server error: {exc.message}")
        sys.exit(1)
    except ProtocolError as exc:
        failure(f"Call error: {exc}")
        sys.exit(1)

    if result.is_error:
        failure(result.text)
        sys.exit(1)
    console.print(result.text, markup=False, highlight=False)


def parse_arguments(pairs: tuple[str, ...]) -> dict[str, Any]:
    """Turn ``KEY=VALUE`` pairs into a tool-arguments mapping."""
    arguments: dict[str, Any] = {}
    for pair in pairs:
        key, sep, raw = pair.partition("=")
        if not sep or not key:
            msg = f"expected KEY=VALUE, got {pair!r}"
            raise ValueError(msg)
        try:
            arguments[key] = json.loads(raw)
        except json.JSONDecodeError:
            arguments[key] = raw
    return arguments
