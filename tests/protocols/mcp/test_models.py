"""Tests for the MCP JSON-RPC models."""

import pytest
from pydantic import ValidationError

from mcpdock.protocols.mcp.models import (
    JsonRpcNotification,
    JsonRpcRequest,
    JsonRpcResponse,
    MCPToolDef,
    ToolCallResult,
)


class TestJsonRpc:
    def test_request_wire_omits_empty_params(self) -> None:
        assert JsonRpcRequest(method="tools/list").to_wire() == {
            "jsonrpc": "2.0",
            "method": "tools/list",
            "id": 1,
        }

    def test_notification_has_no_id(self) -> None:
        wire = JsonRpcNotification(method="notifications/initialized").to_wire()
        assert "id" not in wire

    def test_response_with_error(self) -> None:
        response = JsonRpcResponse.model_validate(
            {"jsonrpc": "2.0", "id": 1, "error": {"code": -32601, "message": "nope"}}
        )
        assert response.result is None
        assert response.error is not None
        assert response.error.code == -32601

    def test_result_and_error_are_exclusive(self) -> None:
        with pytest.raises(ValidationError, match="both"):
            JsonRpcResponse.model_validate(
                {"id": 1, "result": {}, "error": {"code": 1, "message": "x"}}
            )


class TestMCPPayloads:
    def test_tool_def_alias(self) -> None:
        tool = MCPToolDef.model_validate(
            {"name": "resolve-library-id", "inputSchema": {"type": "object"}}
        )
        assert tool.input_schema == {"type": "object"}
        assert tool.description == ""

    def test_call_result_joins_text(self) -> None:
        result = ToolCallResult.from_result(
            {
                "content": [
                    {"type": "text", "text": "first"},
                    {"type": "image", "data": "..."},
                    {"type": "text", "text": "second"},
                ]
            }
        )
        assert result.text == "first\nsecond"
        assert not result.is_error

    def test_call_result_error_flag(self) -> None:
        result = ToolCallResult.from_result(
            {"content": [{"type": "text", "text": "bad"}], "isError": True}
        )
        assert result.is_error

    def test_call_result_without_text(self) -> None:
        assert ToolCallResult.from_result({"value": 3}).text == "{'value': 3}"
        assert ToolCallResult.from_result(None).text == ""
