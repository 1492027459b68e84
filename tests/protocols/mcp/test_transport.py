"""Tests for the MCP stdio transport with mocks."""

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from mcpdock.protocols.errors import TransportError
from mcpdock.protocols.mcp.transport import STREAM_LIMIT, MCPTransport, StdioTransport


def _proc_with_lines(*lines: bytes) -> AsyncMock:
    mock_stdout = AsyncMock()
    mock_stdout.readline = AsyncMock(side_effect=[*lines, b""])
    mock_proc = AsyncMock()
    mock_proc.stdout = mock_stdout
    return mock_proc


class TestStdioTransport:
    def test_satisfies_protocol(self) -> None:
        assert isinstance(StdioTransport(["echo", "test"]), MCPTransport)

    def test_empty_command_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-empty"):
            StdioTransport([])

    async def test_connect_launches_subprocess(self) -> None:
        mock_proc = AsyncMock()
        mock_proc.stdin = MagicMock()
        mock_proc.stdout = AsyncMock()

        with patch("asyncio.create_subprocess_exec", return_value=mock_proc) as mock_exec:
            transport = StdioTransport(["docker", "run", "-i", "--rm", "img"])
            await transport.connect()

        assert mock_exec.await_args.args == ("docker", "run", "-i", "--rm", "img")

    async def test_connect_failure(self) -> None:
        with patch("asyncio.create_subprocess_exec", side_effect=FileNotFoundError("docker")):
            transport = StdioTransport(["docker"])
            with pytest.raises(TransportError, match="Cannot launch docker"):
                await transport.connect()

    async def test_send_writes_json_line(self) -> None:
        mock_stdin = MagicMock()
        mock_stdin.write = MagicMock()
        mock_stdin.drain = AsyncMock()
        mock_proc = AsyncMock()
        mock_proc.stdin = mock_stdin

        transport = StdioTransport(["echo"])
        transport._process = mock_proc

        data = {"jsonrpc": "2.0", "method": "tools/list", "id": 1}
        await transport.send(data)

        written = mock_stdin.write.call_args[0][0]
        assert written.endswith(b"\n")
        assert json.loads(written.decode()) == data

    async def test_receive_skips_non_json(self) -> None:
        expected = {"jsonrpc": "2.0", "id": 1, "result": {}}
        transport = StdioTransport(["echo"])
        transport._process = _proc_with_lines(
            b"Context7 Documentation MCP Server running on stdio\n",
            b"[1, 2]\n",
            (json.dumps(expected) + "\n").encode(),
        )

        assert await transport.receive() == expected

    async def test_receive_eof_raises(self) -> None:
        transport = StdioTransport(["echo"])
        transport._process = _proc_with_lines()

        with pytest.raises(TransportError, match="closed"):
            await transport.receive()

    async def test_send_without_connect_raises(self) -> None:
        with pytest.raises(TransportError, match="not connected"):
            await StdioTransport(["echo"]).send({"test": True})

    async def test_close_terminates_stuck_process(self) -> None:
        waits = 0

        async def wait() -> int:
            nonlocal waits
            waits += 1
            if waits == 1:
                await asyncio.sleep(10)
            return 0

        mock_proc = MagicMock()
        mock_proc.wait = wait
        transport = StdioTransport(["echo"], close_timeout=0.05)
        transport._process = mock_proc

        await transport.close()

        mock_proc.stdin.close.assert_called_once()
        mock_proc.terminate.assert_called_once()
        assert waits == 2

    async def test_close_without_connect_is_noop(self) -> None:
        await StdioTransport(["echo"]).close()

    async def test_connect_uses_large_stream_limit(self) -> None:
        mock_proc = AsyncMock()
        with patch("asyncio.create_subprocess_exec", return_value=mock_proc) as mock_exec:
            await StdioTransport(["echo"]).connect()

        assert mock_exec.await_args.kwargs["limit"] == STREAM_LIMIT
        assert STREAM_LIMIT > 64 * 1024

    async def test_overlong_line_raises_transport_error(self) -> None:
        mock_stdout = AsyncMock()
        mock_stdout.readline = AsyncMock(
            side_effect=ValueError("Separator is found, but chunk is longer than limit")
        )
        mock_proc = AsyncMock()
        mock_proc.stdout = mock_stdout
        transport = StdioTransport(["echo"], limit=1024)
        transport._process = mock_proc

        with pytest.raises(TransportError, match="exceeds 1024 bytes"):
            await transport.receive()

    async def test_strict_rejects_non_json_line(self) -> None:
        transport = StdioTransport(["echo"], strict=True)
        transport._process = _proc_with_lines(
            b"Context7 Documentation MCP Server running on stdio\n",
            b'{"jsonrpc": "2.0", "id": 1, "result": {}}\n',
        )

        with pytest.raises(TransportError, match="Expected a JSON object"):
            await transport.receive()
