"""MCP protocol — stdio client for the containerised server."""

from mcpdock.protocols.mcp.client import MCPClient, request_once
from mcpdock.protocols.mcp.models import (
    JsonRpcError,
    JsonRpcNotification,
    JsonRpcRequest,
    JsonRpcResponse,
    MCPToolDef,
    ToolCallResult,
)
from mcpdock.protocols.mcp.transport import MCPTransport, StdioTransport

__all__ = [
    "JsonRpcError",
    "JsonRpcNotification",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "MCPClient",
    "MCPToolDef",
    "MCPTransport",
    "StdioTransport",
    "ToolCallResult",
    "request_once",
]
