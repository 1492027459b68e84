"""Data models for MCP registrations with the host assistant."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class RemoveOutcome(str, Enum):
    """Result of removing a registration.

    ``NOT_FOUND`` covers every refusal by the host CLI: a name that was never
    registered is the expected case and is not an error.
    """

    REMOVED = "removed"
    NOT_FOUND = "not_found"


class RegistrationEntry(BaseModel):
    """One line of ``claude mcp list``."""

    name: str
    command: str = ""
    status: str = ""
    connected: bool = False


class RegisterResult(BaseModel):
    """Outcome of an idempotent remove-then-add registration."""

    name: str
    previous: RemoveOutcome

    @property
    def replaced(self) -> bool:
        return self.previous is RemoveOutcome.REMOVED


class RegistrationStatus(BaseModel):
    """Read-only view of one name in the host's registration list."""

    name: str
    registered: bool
    connected: bool = False
    command: str = ""
    status: str = ""
    count: int = 0
