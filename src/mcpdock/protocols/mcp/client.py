"""MCPClient — talks to the containerised MCP server over stdio.

Implements tool discovery (``tools/list``) and execution (``tools/call``)
over an :class:`MCPTransport`, plus :func:`request_once` for the one-shot
request/response exchange the health checks rely on.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import Any

from pydantic import ValidationError

from mcpdock import __version__
from mcpdock.protocols.errors import MCPServerError, MCPTimeoutError, TransportError
from mcpdock.protocols.mcp.models import (
    JsonRpcNotification,
    JsonRpcRequest,
    JsonRpcResponse,
    MCPToolDef,
    ToolCallResult,
)
from mcpdock.protocols.mcp.transport import MCPTransport, StdioTransport
from mcpdock.utils.telemetry import ATTR_MCP_METHOD, ATTR_MCP_TOOL, get_tracer

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

PROTOCOL_VERSION = "2024-11-05"


class MCPClient:
    """Async context manager that connects to an MCP server.

    Usage::

        async with MCPClient(spawn_command(settings)) as client:
            tools = await client.list_tools()
            result = await client.call_tool("resolve-library-id", {"libraryName": "react"})
    """

    def __init__(
        self,
        command: Sequence[str] | None = None,
        *,
        transport: MCPTransport | None = None,
        timeout: float = 30.0,
        handshake: bool = True,
    ) -> None:
        if transport is None:
            if not command:
                msg = "MCPClient needs a command or a transport"
                raise ValueError(msg)
            transport = StdioTransport(command)
        self._transport = transport
        self._timeout = timeout
        self._handshake_enabled = handshake
        self._connected = False
        self._next_id = 1

    async def __aenter__(self) -> MCPClient:
        await self.connect()
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.close()

    async def connect(self) -> None:
        """Start the transport and, unless disabled, perform the initialize handshake."""
        await self._transport.connect()
        self._connected = True
        if not self._handshake_enabled:
            return
        try:
            await self._handshake()
        except BaseException:
            await self.close()
            raise

    async def close(self) -> None:
        if self._connected:
            await self._transport.close()
            self._connected = False

    async def list_tools(self) -> list[MCPToolDef]:
        """Send ``tools/list`` and return the advertised tool descriptors."""
        response = await self.request("tools/list")
        raw_tools: list[dict[str, Any]] = (response.result or {}).get("tools", [])
        return [MCPToolDef.model_validate(raw) for raw in raw_tools]

    async def call_tool(self, name: str, arguments: dict[str, Any]) -> ToolCallResult:
        """Send ``tools/call`` for the named tool.

        A JSON-RPC ``error`` (for instance when the server cannot reach its
        upstream) raises :class:`MCPServerError`; a tool-level failure comes
        back as a result with ``is_error`` set.
        """
        with _tracer.start_as_current_span("mcp.tool") as span:
            span.set_attribute(ATTR_MCP_TOOL, name)
            response = await self.request(
                "tools/call",
                params={"name": name, "arguments": arguments},
            )
        return ToolCallResult.from_result(response.result)

    async def request(
        self,
        method: str,
        params: dict[str, Any] | None = None,
    ) -> JsonRpcResponse:
        """Send a request and wait for the response with the same id."""
        if not self._connected:
            msg = "Client not connected"
            raise TransportError(msg)

        request_id = self._next_id
        self._next_id += 1
        request = JsonRpcRequest(method=method, id=request_id, params=params)

        with _tracer.start_as_current_span("mcp.request") as span:
            span.set_attribute(ATTR_MCP_METHOD, method)
            await self._transport.send(request.to_wire())
            try:
                response = await asyncio.wait_for(
                    self._receive_for(request_id),
                    timeout=self._timeout,
                )
            except TimeoutError:
                raise MCPTimeoutError(method, self._timeout) from None

        if response.error is not None:
            raise MCPServerError(
                method,
                response.error.code,
                response.error.message,
                response.error.data,
            )
        return response

    async def notify(self, method: str, params: dict[str, Any] | None = None) -> None:
        await self._transport.send(JsonRpcNotification(method=method, params=params).to_wire())

    async def _handshake(self) -> None:
        """Perform the MCP initialize handshake."""
        await self.request(
            "initialize",
            params={
                "protocolVersion": PROTOCOL_VERSION,
                "capabilities": {},
                "clientInfo": {"name": "mcpdock", "version": __version__},
            },
        )
        await self.notify("notifications/initialized")

    async def _receive_for(self, request_id: int) -> JsonRpcResponse:
        while True:
            raw = await self._transport.receive()
            if raw.get("id") != request_id or "method" in raw:
                # server notification or request, or a stale response
                logger.debug("Skipping unrelated message: %s", raw.get("method", raw.get("id")))
                continue
            return _parse_response(raw)


async def request_once(
    command: Sequence[str],
    request: JsonRpcRequest,
    *,
    timeout: float = 10.0,
    transport: MCPTransport | None = None,
    strict: bool = True,
) -> JsonRpcResponse:
    """Send one request without a handshake and parse the first response.

    Mirrors what a host does when it pipes a single line into a fresh
    container: one request in, the first stdout line out, then the process is
    shut down.  With *strict* (the default) that first line must be a JSON
    object, otherwise :class:`TransportError` is raised; without it, leading
    non-JSON lines are skipped.  The error object, if any, is returned rather
    than raised.  *strict* applies only to the default stdio transport.
    """
    transport = transport or StdioTransport(command, strict=strict)
    await transport.connect()
    try:
        with _tracer.start_as_current_span("mcp.request") as span:
            span.set_attribute(ATTR_MCP_METHOD, request.method)
            await transport.send(request.to_wire())
            try:
                raw = await asyncio.wait_for(transport.receive(), timeout=timeout)
            except TimeoutError:
                raise MCPTimeoutError(request.method, timeout) from None
        return _parse_response(raw)
    finally:
        await transport.close()


def _parse_response(raw: dict[str, Any]) -> JsonRpcResponse:
    try:
        return JsonRpcResponse.model_validate(raw)
    except ValidationError as exc:
        raise TransportError(f"Malformed JSON-RPC response: {exc}") from exc
