"""MCP stdio transport.

:class:`StdioTransport` satisfies the :class:`MCPTransport` protocol,
providing ``connect``, ``send``, ``receive``, and ``close`` methods.
"""

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from mcpdock.protocols.errors import TransportError

logger = logging.getLogger(__name__)

# Documentation responses arrive as a single JSON line and easily exceed
# asyncio's 64 KiB default.
STREAM_LIMIT = 16 * 1024 * 1024


@runtime_checkable
class MCPTransport(Protocol):
    """Abstract transport for MCP JSON-RPC communication."""

    async def connect(self) -> None: ...
    async def send(self, data: dict[str, Any]) -> None: ...
    async def receive(self) -> dict[str, Any]: ...
    async def close(self) -> None: ...


class StdioTransport:
    """Communicates with an MCP server via subprocess stdin/stdout.

    Sends and receives newline-delimited JSON.  *command* is the full spawn
    command line, typically a ``docker run -i --rm ...`` invocation.  With
    *strict* set, a stdout line that is not a JSON object is an error instead
    of being skipped.
    """

    def __init__(
        self,
        command: Sequence[str],
        env: dict[str, str] | None = None,
        *,
        close_timeout: float = 5.0,
        strict: bool = False,
        limit: int = STREAM_LIMIT,
    ) -> None:
        if not command:
            msg = "StdioTransport requires a non-empty command"
            raise ValueError(msg)
        self._command = list(command)
        self._env = env
        self._close_timeout = close_timeout
        self._strict = strict
        self._limit = limit
        self._process: asyncio.subprocess.Process | None = None

    async def connect(self) -> None:
        """Launch the subprocess."""
        try:
            self._process = await asyncio.create_subprocess_exec(
                *self._command,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.DEVNULL,
                env=self._env,
                limit=self._limit,
            )
        except OSError as exc:
            raise TransportError(f"Cannot launch {self._command[0]}: {exc}") from exc

    async def send(self, data: dict[str, Any]) -> None:
        """Write a JSON line to stdin."""
        if self._process is None or self._process.stdin is None:
            msg = "Transport not connected"
            raise TransportError(msg)
        line = json.dumps(data) + "\n"
        self._process.stdin.write(line.encode())
        await self._process.stdin.drain()

    async def receive(self) -> dict[str, Any]:
        """Read the next JSON object line from stdout.

        Lines that are not JSON objects (banners, stray log output) are skipped
        unless the transport is strict.  A line longer than the stream limit
        raises :class:`TransportError`.
        """
        if self._process is None or self._process.stdout is None:
            msg = "Transport not connected"
            raise TransportError(msg)
        while True:
            try:
                line = await self._process.stdout.readline()
            except ValueError as exc:
                raise TransportError(f"Response line exceeds {self._limit} bytes") from exc
            if not line:
                msg = "Transport closed"
                raise TransportError(msg)
            try:
                message = json.loads(line)
            except ValueError:
                message = None
            if isinstance(message, dict):
                return message
            if self._strict:
                raise TransportError(f"Expected a JSON object, got {line[:200]!r}")
            logger.debug("Skipping non-JSON-object line: %r", line[:200])

    async def close(self) -> None:
        """Close stdin, give the server a moment to exit, then terminate it."""
        if self._process is None:
            return
        process, self._process = self._process, None
        if process.stdin:
            process.stdin.close()
        try:
            await asyncio.wait_for(process.wait(), timeout=self._close_timeout)
        except TimeoutError:
            with contextlib.suppress(ProcessLookupError):
                process.terminate()
            await process.wait()
