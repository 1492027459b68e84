"""run_command — the single seam through which external CLIs are invoked.

Both the ``docker`` and ``claude`` adapters go through here, so tests fake
one coroutine instead of two binaries.
"""

from __future__ import annotations

import asyncio
import logging
import shlex
from collections.abc import Sequence

from pydantic import BaseModel, Field

from mcpdock.runtime.errors import CommandError, CommandNotFoundError, CommandTimeoutError
from mcpdock.utils.telemetry import ATTR_COMMAND, ATTR_COMMAND_ARGS, ATTR_EXIT_CODE, get_tracer

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)


class CommandResult(BaseModel):
    """Captured outcome of an external command."""

    args: list[str] = Field(..., description="The argv that was executed.")
    returncode: int = Field(..., description="Process exit code.")
    stdout: str = Field(default="", description="Captured stdout, stripped.")
    stderr: str = Field(default="", description="Captured stderr, stripped.")

    @property
    def ok(self) -> bool:
        return self.returncode == 0


async def run_command(
    args: Sequence[str],
    *,
    stdin: str | None = None,
    timeout: float | None = None,
    check: bool = True,
) -> CommandResult:
    """Run *args* to completion and capture its output.

    Raises:
        CommandNotFoundError: The program could not be launched.
        CommandTimeoutError: *timeout* elapsed; the process is killed.
        CommandError: Non-zero exit and *check* is true.
    """
    argv = list(args)
    with _tracer.start_as_current_span("process.run") as span:
        span.set_attribute(ATTR_COMMAND, argv[0])
        span.set_attribute(ATTR_COMMAND_ARGS, shlex.join(argv))
        logger.debug("exec: %s", shlex.join(argv))

        try:
            proc = await asyncio.create_subprocess_exec(
                *argv,
                stdin=asyncio.subprocess.PIPE if stdin is not None else asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise CommandNotFoundError(argv[0], str(exc)) from exc

        stdin_bytes = stdin.encode() if stdin is not None else None
        try:
            stdout_bytes, stderr_bytes = await asyncio.wait_for(
                proc.communicate(input=stdin_bytes),
                timeout=timeout,
            )
        except TimeoutError:
            proc.kill()
            await proc.wait()
            raise CommandTimeoutError(argv[0], timeout or 0.0) from None

        returncode = proc.returncode if proc.returncode is not None else -1
        span.set_attribute(ATTR_EXIT_CODE, returncode)

        result = CommandResult(
            args=argv,
            returncode=returncode,
            stdout=stdout_bytes.decode(errors="replace").strip() if stdout_bytes else "",
            stderr=stderr_bytes.decode(errors="replace").strip() if stderr_bytes else "",
        )

    if returncode != 0:
        logger.debug("exit %d from %s: %s", returncode, argv[0], result.stderr or result.stdout)
        if check:
            raise CommandError(argv, returncode, result.stderr or result.stdout)
    return result
