"""Registry — MCP server registrations with the host assistant."""

from mcpdock.registry.claude import ClaudeRegistrar, parse_list_output
from mcpdock.registry.models import (
    RegisterResult,
    RegistrationEntry,
    RegistrationStatus,
    RemoveOutcome,
)
from mcpdock.registry.service import RegistrationService

__all__ = [
    "ClaudeRegistrar",
    "RegisterResult",
    "RegistrationEntry",
    "RegistrationService",
    "RegistrationStatus",
    "RemoveOutcome",
    "parse_list_output",
]
