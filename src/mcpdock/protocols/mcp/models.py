"""MCP models — JSON-RPC 2.0 messages and tool definitions.

Implements the message format used by the Model Context Protocol for
tool discovery (``tools/list``) and execution (``tools/call``).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, model_validator

# ---------------------------------------------------------------------------
# JSON-RPC 2.0 envelope
# ---------------------------------------------------------------------------


class JsonRpcRequest(BaseModel):
    """A JSON-RPC 2.0 request message."""

    jsonrpc: str = "2.0"
    method: str
    id: int | str = 1
    params: dict[str, Any] | None = None

    def to_wire(self) -> dict[str, Any]:
        """Dump for the wire, omitting ``params`` when there are none."""
        return self.model_dump(exclude_none=True)


class JsonRpcNotification(BaseModel):
    """A JSON-RPC 2.0 notification (a request without an id)."""

    jsonrpc: str = "2.0"
    method: str
    params: dict[str, Any] | None = None

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class JsonRpcError(BaseModel):
    """A JSON-RPC 2.0 error object."""

    code: int
    message: str
    data: Any = None


class JsonRpcResponse(BaseModel):
    """A JSON-RPC 2.0 response message; ``result`` and ``error`` are exclusive."""

    jsonrpc: str = "2.0"
    id: int | str | None = None
    result: dict[str, Any] | None = None
    error: JsonRpcError | None = None

    @model_validator(mode="after")
    def _exclusive(self) -> JsonRpcResponse:
        if self.result is not None and self.error is not None:
            msg = "response carries both 'result' and 'error'"
            raise ValueError(msg)
        return self


# ---------------------------------------------------------------------------
# MCP-specific payloads
# ---------------------------------------------------------------------------


class MCPToolDef(BaseModel):
    """A tool definition as returned by ``tools/list``."""

    model_config = {"populate_by_name": True}

    name: str
    description: str = ""
    input_schema: dict[str, Any] = Field(default_factory=dict, alias="inputSchema")


class ToolCallResult(BaseModel):
    """Text content of a ``tools/call`` result."""

    text: str = ""
    is_error: bool = False

    @classmethod
    def from_result(cls, result: dict[str, Any] | None) -> ToolCallResult:
        """Join the ``text`` items of an MCP ``content`` array."""
        if result is None:
            return cls()
        content: list[dict[str, Any]] = result.get("content") or []
        parts = [str(item.get("text", "")) for item in content if item.get("type") == "text"]
        return cls(
            text="\n".join(parts) if parts else str(result),
            is_error=bool(result.get("isError", False)),
        )
