"""Protocol layer — JSON-RPC over stdio to MCP servers."""

from mcpdock.protocols.errors import (
    MCPServerError,
    MCPTimeoutError,
    ProtocolError,
    TransportError,
)

__all__ = [
    "MCPServerError",
    "MCPTimeoutError",
    "ProtocolError",
    "TransportError",
]
