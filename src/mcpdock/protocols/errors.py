"""Shared error types for the protocol layer."""

from __future__ import annotations


class ProtocolError(Exception):
    """Base error for all protocol-layer failures."""


class TransportError(ProtocolError):
    """The stdio channel to the server is unusable (not started, closed, garbled)."""


class MCPTimeoutError(ProtocolError):
    """The server did not answer a request in time."""

    def __init__(self, method: str, timeout: float) -> None:
        self.method = method
        self.timeout = timeout
        super().__init__(f"No response to {method} within {timeout}s")


class MCPServerError(ProtocolError):
    """The server answered with a JSON-RPC ``error`` object."""

    def __init__(self, method: str, code: int, message: str, data: object = None) -> None:
        self.method = method
        self.code = code
        self.message = message
        self.data = data
        super().__init__(f"{method} failed ({code}): {message}")
