"""Shared error types for the runtime layer (external CLIs)."""

from __future__ import annotations

from collections.abc import Sequence


class RuntimeToolError(Exception):
    """Base error for all failures of an external command-line tool."""


class CommandNotFoundError(RuntimeToolError):
    """The external binary could not be launched."""

    def __init__(self, program: str, detail: str = "") -> None:
        self.program = program
        self.detail = detail
        super().__init__(f"Command not found: {program}" + (f" ({detail})" if detail else ""))


class CommandError(RuntimeToolError):
    """An external command exited with a non-zero status."""

    def __init__(self, args: Sequence[str], returncode: int, stderr: str = "") -> None:
        self.args_list = list(args)
        self.returncode = returncode
        self.stderr = stderr
        msg = f"{args[0] if args else 'command'} failed (rc={returncode})"
        if stderr:
            msg += f": {stderr}"
        super().__init__(msg)


class CommandTimeoutError(RuntimeToolError):
    """An external command did not finish within its timeout."""

    def __init__(self, program: str, timeout: float) -> None:
        self.program = program
        self.timeout = timeout
        super().__init__(f"{program} timed out after {timeout}s")


class BuildError(RuntimeToolError):
    """The image build failed."""

    def __init__(self, tag: str, detail: str = "") -> None:
        self.tag = tag
        self.detail = detail
        super().__init__(f"Image build failed: {tag}" + (f": {detail}" if detail else ""))


class RegistrationError(RuntimeToolError):
    """The host CLI refused to add an MCP registration."""

    def __init__(self, name: str, detail: str = "") -> None:
        self.name = name
        self.detail = detail
        super().__init__(f"Registration failed: {name}" + (f": {detail}" if detail else ""))
