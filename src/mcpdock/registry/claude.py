"""ClaudeRegistrar — MCP registrations through the ``claude mcp`` CLI."""

from __future__ import annotations

import logging
import re
import shlex
from collections.abc import Sequence

from mcpdock.registry.models import RegistrationEntry, RemoveOutcome
from mcpdock.runtime.errors import CommandError, RegistrationError
from mcpdock.runtime.process import CommandResult, run_command

logger = logging.getLogger(__name__)

_NAME_RE = re.compile(r"^[\w.@/-]+$")
_CONNECTED_RE = re.compile(r"\bConnected\b")


def parse_list_output(text: str) -> list[RegistrationEntry]:
    """Parse ``claude mcp list`` output.

    Server lines look like ``<name>: <command> - <status>``, e.g.::

        context7: docker run -i --rm context7-mcp:1.0 - ✓ Connected

    Banner lines ("Checking MCP server health...") and blank lines are skipped.
    """
    entries: list[RegistrationEntry] = []
    for raw in text.splitlines():
        line = raw.strip()
        name, sep, rest = line.partition(": ")
        if not sep or not _NAME_RE.match(name):
            continue
        command, dash, status = rest.rpartition(" - ")
        if not dash:
            command, status = rest, ""
        entries.append(
            RegistrationEntry(
                name=name,
                command=command.strip(),
                status=status.strip(),
                connected=bool(_CONNECTED_RE.search(status)),
            )
        )
    return entries


class ClaudeRegistrar:
    """Registers MCP servers with the Claude CLI.

    Satisfies the :class:`~mcpdock.runtime.interfaces.ProcessRegistrar`
    protocol.
    """

    def __init__(self, binary: str = "claude") -> None:
        self._binary = binary

    async def add(self, name: str, command: Sequence[str], scope: str = "user") -> None:
        cmd = [self._binary, "mcp", "add", name, "--scope", scope, "--", *command]
        try:
            await self._run(cmd)
        except CommandError as exc:
            raise RegistrationError(name, exc.stderr) from exc
        logger.info("Registered %s: %s", name, shlex.join(command))

    async def remove(self, name: str) -> RemoveOutcome:
        result = await self._run([self._binary, "mcp", "remove", name], check=False)
        if result.ok:
            return RemoveOutcome.REMOVED
        logger.info("%s was not registered: %s", name, result.stderr or result.stdout)
        return RemoveOutcome.NOT_FOUND

    async def list_entries(self) -> list[RegistrationEntry]:
        result = await self._run([self._binary, "mcp", "list"])
        return parse_list_output(result.stdout)

    @staticmethod
    async def _run(cmd: list[str], *, check: bool = True) -> CommandResult:
        return await run_command(cmd, check=check)
