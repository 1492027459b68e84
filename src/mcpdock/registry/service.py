"""RegistrationService — register / deregister / status over a registrar."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from mcpdock.registry.models import RegisterResult, RegistrationStatus, RemoveOutcome
from mcpdock.utils.telemetry import ATTR_REGISTRATION, get_tracer

if TYPE_CHECKING:
    from mcpdock.runtime.interfaces import ProcessRegistrar

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)


class RegistrationService:
    """Registration lifecycle for one host.

    Usage::

        service = RegistrationService(ClaudeRegistrar())
        await service.register("context7", spawn_command(settings))
        status = await service.status("context7")
    """

    def __init__(self, registrar: ProcessRegistrar) -> None:
        self._registrar = registrar

    async def register(
        self,
        name: str,
        spawn_command: Sequence[str],
        scope: str = "user",
    ) -> RegisterResult:
        """Remove any stale registration for *name*, then add a fresh one.

        Calling this twice leaves exactly one entry.  Failure of the removal
        step is reported in the result; failure of the add step raises
        :class:`~mcpdock.runtime.errors.RegistrationError`.
        """
        with _tracer.start_as_current_span("registry.register") as span:
            span.set_attribute(ATTR_REGISTRATION, name)
            previous = await self._registrar.remove(name)
            await self._registrar.add(name, list(spawn_command), scope)
        return RegisterResult(name=name, previous=previous)

    async def deregister(self, name: str) -> RemoveOutcome:
        with _tracer.start_as_current_span("registry.deregister") as span:
            span.set_attribute(ATTR_REGISTRATION, name)
            return await self._registrar.remove(name)

    async def status(self, name: str) -> RegistrationStatus:
        entries = [e for e in await self._registrar.list_entries() if e.name == name]
        if not entries:
            return RegistrationStatus(name=name, registered=False)
        if len(entries) > 1:
            logger.warning("%d registrations found for %s", len(entries), name)
        entry = entries[0]
        return RegistrationStatus(
            name=name,
            registered=True,
            connected=entry.connected,
            command=entry.command,
            status=entry.status,
            count=len(entries),
        )
