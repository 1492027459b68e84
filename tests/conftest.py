"""Shared fakes and fixtures."""

from __future__ import annotations

import shlex
import sys
from collections.abc import Sequence
from pathlib import Path

import pytest

from mcpdock.registry.models import RegistrationEntry, RemoveOutcome
from mcpdock.runtime.errors import RegistrationError
from mcpdock.settings.models import ProjectSettings, SecretSettings

STUB_SERVER = Path(__file__).parent / "fixtures" / "stub_context7_server.py"


class FakeRegistrar:
    """In-memory stand-in for the ``claude mcp`` CLI.

    Satisfies the ProcessRegistrar protocol.  ``calls`` records the order of
    operations; ``connected`` decides how listed entries are reported.
    """

    def __init__(self, *, connected: bool = True, fail_add: bool = False) -> None:
        self.entries: dict[str, list[str]] = {}
        self.calls: list[tuple[str, str]] = []
        self.connected = connected
        self.fail_add = fail_add

    async def add(self, name: str, command: Sequence[str], scope: str = "user") -> None:
        self.calls.append(("add", name))
        if self.fail_add:
            raise RegistrationError(name, "MCP server already exists")
        self.entries[name] = list(command)

    async def remove(self, name: str) -> RemoveOutcome:
        self.calls.append(("remove", name))
        if self.entries.pop(name, None) is None:
            return RemoveOutcome.NOT_FOUND
        return RemoveOutcome.REMOVED

    async def list_entries(self) -> list[RegistrationEntry]:
        status = "✓ Connected" if self.connected else "✗ Failed to connect"
        return [
            RegistrationEntry(
                name=name,
                command=shlex.join(command),
                status=status,
                connected=self.connected,
            )
            for name, command in self.entries.items()
        ]


@pytest.fixture
def fake_registrar() -> FakeRegistrar:
    return FakeRegistrar()


@pytest.fixture
def settings(tmp_path: Path) -> ProjectSettings:
    """Default settings with the secret file pointed somewhere that does not exist."""
    return ProjectSettings(secret=SecretSettings(host_path=tmp_path / "no-such-key"))


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """A project file equivalent to the defaults, minus any host secret."""
    path = tmp_path / "mcpdock.yaml"
    path.write_text(f"secret:\n  host_path: {tmp_path / 'no-such-key'}\n")
    return path


@pytest.fixture
def stub_server_command() -> list[str]:
    """Spawn command for a stdio MCP server that mimics Context7's tools."""
    return [sys.executable, str(STUB_SERVER)]
