"""DockerCLI — drives the ``docker`` binary via subprocess.

Uses the ``docker`` CLI (no docker-py dependency).  Every call goes through
:func:`mcpdock.runtime.process.run_command`; cleanup calls (``stop``, ``rm``,
``rmi``) never raise and report success as a bool instead.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Sequence
from typing import TYPE_CHECKING

from mcpdock.runtime.errors import BuildError, CommandError
from mcpdock.runtime.models import ContainerLimits, ContainerSummary, ImageInfo
from mcpdock.runtime.process import CommandResult, run_command

if TYPE_CHECKING:
    from mcpdock.settings.models import ProjectSettings

logger = logging.getLogger(__name__)

_SIZE_RE = re.compile(r"^(\d+)([bkmg]?)$", re.IGNORECASE)
_UNITS = {"": 1, "b": 1, "k": 1024, "m": 1024**2, "g": 1024**3}


def parse_memory(size: str) -> int:
    """Convert a Docker memory string (``512m``, ``2g``) to bytes."""
    match = _SIZE_RE.match(size.strip())
    if match is None:
        msg = f"Invalid memory size: {size!r}"
        raise ValueError(msg)
    number, unit = match.groups()
    return int(number) * _UNITS[unit.lower()]


def format_cpus(cpus: float) -> str:
    """Render a CPU count the way a person would type it (``1``, ``0.5``)."""
    return f"{cpus:g}"


def spawn_command(settings: ProjectSettings, *, container_name: str | None = None) -> list[str]:
    """Build the ``docker run`` line the host uses to launch the server.

    The container reads requests on stdin (``-i``), is removed when the
    process exits (``--rm``) and always carries the memory and CPU ceiling.
    The secret file is mounted only when it exists on the host.
    """
    container = settings.container
    cmd: list[str] = [
        "docker", "run",
        "-i",
        "--rm",
        "--name", container_name or container.name,
        "--memory", container.memory,
        "--cpus", format_cpus(container.cpus),
    ]

    secret_path = settings.secret.resolved_host_path()
    if secret_path.is_file():
        cmd.extend(["-v", f"{secret_path}:{settings.secret.container_path}:ro"])

    cmd.append(settings.image.reference)
    cmd.extend(container.server_args)
    return cmd


class DockerCLI:
    """Image and container operations over the ``docker`` CLI.

    Satisfies the :class:`~mcpdock.runtime.interfaces.ImageBuilder` protocol.
    """

    def __init__(self, binary: str = "docker") -> None:
        self._binary = binary

    # -- images -------------------------------------------------------------

    async def build(
        self,
        tag: str,
        dockerfile: str,
        platforms: Sequence[str] | None = None,
    ) -> None:
        """Build from Dockerfile text on stdin (no build context)."""
        cmd = [self._binary, "build"]
        if platforms:
            cmd.extend(["--platform", ",".join(platforms)])
        cmd.extend(["-t", tag, "-"])
        try:
            await self._run(cmd, stdin=dockerfile)
        except CommandError as exc:
            raise BuildError(tag, exc.stderr) from exc

    async def inspect_image(self, tag: str) -> ImageInfo | None:
        result = await self._run([self._binary, "image", "inspect", tag], check=False)
        if not result.ok:
            return None
        try:
            data = json.loads(result.stdout)[0]
        except (json.JSONDecodeError, IndexError, KeyError):
            logger.warning("Unparseable image inspect output for %s", tag)
            return None
        return ImageInfo(
            reference=tag,
            size_bytes=int(data.get("Size", 0)),
            architecture=str(data.get("Architecture", "")),
            os=str(data.get("Os", "linux")),
        )

    async def remove_image(self, tag: str) -> bool:
        result = await self._run([self._binary, "rmi", tag], check=False)
        return result.ok

    # -- containers ---------------------------------------------------------

    def interactive_command(self, image: str, args: Sequence[str] = ()) -> list[str]:
        """Argv for a throwaway container that reads requests on stdin."""
        return [self._binary, "run", "-i", "--rm", image, *args]

    async def run(
        self,
        image: str,
        args: Sequence[str] = (),
        *,
        entrypoint: str | None = None,
        stdin: str | None = None,
        timeout: float | None = None,
    ) -> CommandResult:
        """One-shot ``docker run --rm``; the caller judges the exit code."""
        cmd = [self._binary, "run", "--rm"]
        if stdin is not None:
            cmd.append("-i")
        if entrypoint is not None:
            cmd.extend(["--entrypoint", entrypoint])
        cmd.append(image)
        cmd.extend(args)
        return await self._run(cmd, stdin=stdin, timeout=timeout, check=False)

    async def run_detached(
        self,
        image: str,
        args: Sequence[str] = (),
        *,
        name: str,
        entrypoint: str | None = None,
        memory: str | None = None,
        cpus: float | None = None,
    ) -> str:
        """Start a background container and return its id."""
        cmd = [self._binary, "run", "-d", "--name", name]
        if memory is not None:
            cmd.extend(["--memory", memory])
        if cpus is not None:
            cmd.extend(["--cpus", format_cpus(cpus)])
        if entrypoint is not None:
            cmd.extend(["--entrypoint", entrypoint])
        cmd.append(image)
        cmd.extend(args)
        result = await self._run(cmd)
        return result.stdout

    async def inspect_container_limits(self, name: str) -> ContainerLimits:
        result = await self._run([
            self._binary, "inspect",
            "--format", "{{.HostConfig.Memory}} {{.HostConfig.NanoCpus}}",
            name,
        ])
        memory, _, nano_cpus = result.stdout.partition(" ")
        return ContainerLimits(memory_bytes=int(memory), nano_cpus=int(nano_cpus or 0))

    async def running_names(self) -> list[str]:
        result = await self._run([self._binary, "ps", "--format", "{{.Names}}"])
        return [line for line in result.stdout.splitlines() if line]

    async def containers_for_image(self, reference: str) -> list[ContainerSummary]:
        result = await self._run([
            self._binary, "ps",
            "--filter", f"ancestor={reference}",
            "--format", "{{.Names}}\t{{.Status}}\t{{.Image}}",
        ])
        containers: list[ContainerSummary] = []
        for line in result.stdout.splitlines():
            if not line:
                continue
            name, _, rest = line.partition("\t")
            status, _, image = rest.partition("\t")
            containers.append(ContainerSummary(name=name, status=status, image=image))
        return containers

    async def logs(self, name: str) -> str:
        result = await self._run([self._binary, "logs", name])
        return "\n".join(part for part in (result.stdout, result.stderr) if part)

    async def stop(self, name: str) -> bool:
        result = await self._run([self._binary, "stop", name], check=False)
        return result.ok

    async def remove_container(self, name: str, *, force: bool = False) -> bool:
        cmd = [self._binary, "rm"]
        if force:
            cmd.append("-f")
        cmd.append(name)
        result = await self._run(cmd, check=False)
        return result.ok

    @staticmethod
    async def _run(
        cmd: list[str],
        *,
        stdin: str | None = None,
        timeout: float | None = None,
        check: bool = True,
    ) -> CommandResult:
        return await run_command(cmd, stdin=stdin, timeout=timeout, check=check)
