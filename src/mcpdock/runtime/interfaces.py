"""Capability protocols for the two external CLIs.

``ImageBuilder`` is satisfied by :class:`~mcpdock.runtime.docker.DockerCLI`
and ``ProcessRegistrar`` by :class:`~mcpdock.registry.claude.ClaudeRegistrar`;
tests provide in-memory fakes instead.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from mcpdock.registry.models import RegistrationEntry, RemoveOutcome
    from mcpdock.runtime.models import ImageInfo


@runtime_checkable
class ImageBuilder(Protocol):
    """Builds, inspects and removes container images."""

    async def build(
        self,
        tag: str,
        dockerfile: str,
        platforms: Sequence[str] | None = None,
    ) -> None:
        """Build *dockerfile* and tag the result as *tag*."""
        ...

    async def inspect_image(self, tag: str) -> ImageInfo | None:
        """Return image metadata, or ``None`` when no such image exists."""
        ...

    async def remove_image(self, tag: str) -> bool:
        """Remove the image; ``False`` when there was nothing to remove."""
        ...


@runtime_checkable
class ProcessRegistrar(Protocol):
    """Adds, removes and lists MCP server registrations with the host."""

    async def add(self, name: str, command: Sequence[str], scope: str = "user") -> None:
        """Register *command* as the launch command for *name*."""
        ...

    async def remove(self, name: str) -> RemoveOutcome:
        """Remove *name*; absence is reported, never raised."""
        ...

    async def list_entries(self) -> list[RegistrationEntry]:
        """Return every registration the host currently knows about."""
        ...
