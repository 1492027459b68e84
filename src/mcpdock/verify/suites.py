"""The three verification suites: build, MCP functionality, host integration."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from typing import TYPE_CHECKING

from mcpdock.protocols.mcp.client import request_once
from mcpdock.protocols.mcp.models import JsonRpcRequest, JsonRpcResponse
from mcpdock.registry.models import RemoveOutcome
from mcpdock.runtime.docker import DockerCLI, parse_memory, spawn_command
from mcpdock.settings.dockerfile import render_dockerfile
from mcpdock.verify.checks import Check, CheckOutcome, CheckSuite

if TYPE_CHECKING:
    from mcpdock.registry.service import RegistrationService
    from mcpdock.settings.models import ProjectSettings

Probe = Callable[..., Awaitable[JsonRpcResponse]]

TOOLS_LIST_REQUEST = JsonRpcRequest(method="tools/list", id=1)


class BuildSuite:
    """Builds a throwaway test image and checks what came out."""

    def __init__(self, docker: DockerCLI, settings: ProjectSettings) -> None:
        self._docker = docker
        self._settings = settings
        self._tag = settings.verify.test_image

    def suite(self) -> CheckSuite:
        return CheckSuite(
            "build",
            [
                Check("Docker build validation", self.check_build),
                Check("Image size validation", self.check_size),
                Check("Architecture support", self.check_architecture),
                Check("Non-root user validation", self.check_user),
                Check("MCP package validation", self.check_package),
            ],
            teardown=self.teardown,
        )

    async def check_build(self) -> CheckOutcome:
        await self._docker.build(self._tag, render_dockerfile(self._settings.image))
        return CheckOutcome.ok(f"built {self._tag}")

    async def check_size(self) -> CheckOutcome:
        info = await self._docker.inspect_image(self._tag)
        if info is None:
            return CheckOutcome.fail(f"image {self._tag} not found")
        ceiling = self._settings.verify.max_image_size_mb
        if info.size_mb < ceiling:
            return CheckOutcome.ok(f"{info.size_mb:.1f}MB")
        return CheckOutcome.fail(f"{info.size_mb:.1f}MB exceeds {ceiling:g}MB")

    async def check_architecture(self) -> CheckOutcome:
        info = await self._docker.inspect_image(self._tag)
        if info is None:
            return CheckOutcome.fail(f"image {self._tag} not found")
        if info.architecture in self._settings.verify.architectures:
            return CheckOutcome.ok(info.architecture)
        return CheckOutcome.fail(f"unsupported architecture: {info.architecture}")

    async def check_user(self) -> CheckOutcome:
        result = await self._docker.run(self._tag, ["-c", "whoami"], entrypoint="/bin/sh")
        user = result.stdout.strip()
        if user == self._settings.image.user:
            return CheckOutcome.ok(user)
        return CheckOutcome.fail(f"running as {user or 'unknown'}")

    async def check_package(self) -> CheckOutcome:
        result = await self._docker.run(self._tag, ["--help"])
        executable = self._settings.image.executable
        if executable in f"{result.stdout}\n{result.stderr}":
            return CheckOutcome.ok(executable)
        return CheckOutcome.fail(f"{executable} not found in --help output")

    async def teardown(self) -> None:
        await self._docker.remove_image(self._tag)


class McpSuite:
    """Talks to the built image over stdio and checks its container contract."""

    def __init__(
        self,
        docker: DockerCLI,
        settings: ProjectSettings,
        *,
        probe: Probe | None = None,
    ) -> None:
        self._docker = docker
        self._settings = settings
        self._probe = probe or request_once
        self._image = settings.image.reference
        self._tool_names: list[str] = []

    def suite(self) -> CheckSuite:
        return CheckSuite(
            "mcp",
            [
                Check("Server help command", self.check_help),
                Check("JSON-RPC tools/list", self.check_tools_list),
                Check("Expected tools validation", self.check_required_tools),
                Check("tools/list is repeatable", self.check_tools_list_stable),
                Check("Resource limits", self.check_resource_limits),
                Check("Container naming", self.check_container_naming),
            ],
        )

    async def check_help(self) -> CheckOutcome:
        result = await self._docker.run(self._image, ["--help"])
        marker = self._settings.verify.help_marker
        if marker in f"{result.stdout}\n{result.stderr}":
            return CheckOutcome.ok()
        return CheckOutcome.fail(f"'{marker}' not in --help output")

    async def check_tools_list(self) -> CheckOutcome:
        names, error = await self._list_tool_names()
        if error:
            return CheckOutcome.fail(error)
        if not names:
            return CheckOutcome.fail("server returned no tools")
        self._tool_names = names
        return CheckOutcome.ok(f"{len(names)} tools")

    async def check_required_tools(self) -> CheckOutcome:
        if not self._tool_names:
            names, error = await self._list_tool_names()
            if error:
                return CheckOutcome.fail(error)
            self._tool_names = names
        required = self._settings.verify.required_tools
        missing = [name for name in required if name not in self._tool_names]
        if missing:
            found = ", ".join(self._tool_names) or "none"
            return CheckOutcome.fail(f"missing {', '.join(missing)} (found: {found})")
        return CheckOutcome.ok(", ".join(required))

    async def check_tools_list_stable(self) -> CheckOutcome:
        first, error = await self._list_tool_names()
        if error:
            return CheckOutcome.fail(error)
        second, error = await self._list_tool_names()
        if error:
            return CheckOutcome.fail(error)
        if set(first) == set(second):
            return CheckOutcome.ok()
        return CheckOutcome.fail(f"tool sets differ: {sorted(first)} vs {sorted(second)}")

    async def check_resource_limits(self) -> CheckOutcome:
        container = self._settings.container
        name = "test-limits"
        await self._docker.run_detached(
            self._image,
            ["-c", "sleep 5"],
            name=name,
            entrypoint="/bin/sh",
            memory=container.memory,
            cpus=container.cpus,
        )
        try:
            limits = await self._docker.inspect_container_limits(name)
        finally:
            await self._docker.stop(name)
            await self._docker.remove_container(name, force=True)

        expected_memory = parse_memory(container.memory)
        if limits.memory_bytes != expected_memory:
            return CheckOutcome.fail(f"memory limit {limits.memory_bytes}, expected {expected_memory}")
        if limits.cpus != container.cpus:
            return CheckOutcome.fail(f"cpu limit {limits.cpus:g}, expected {container.cpus:g}")
        return CheckOutcome.ok(f"{container.memory} / {container.cpus:g} CPU")

    async def check_container_naming(self) -> CheckOutcome:
        name = f"{self._settings.container.name}-test"
        await self._docker.run_detached(
            self._image,
            ["-c", "sleep 3"],
            name=name,
            entrypoint="/bin/sh",
        )
        try:
            visible = name in await self._docker.running_names()
        finally:
            await self._docker.stop(name)
            await self._docker.remove_container(name, force=True)
        if visible:
            return CheckOutcome.ok(name)
        return CheckOutcome.fail(f"{name} not visible in docker ps")

    async def _list_tool_names(self) -> tuple[list[str], str]:
        command = self._docker.interactive_command(
            self._image, self._settings.image.default_args
        )
        response = await self._probe(
            command,
            TOOLS_LIST_REQUEST,
            timeout=self._settings.verify.probe_timeout,
        )
        if response.error is not None:
            return [], f"server error {response.error.code}: {response.error.message}"
        tools: Sequence[dict[str, object]] = (response.result or {}).get("tools", [])
        return [str(tool.get("name", "")) for tool in tools], ""


class IntegrationSuite:
    """Registers a test entry with the host and checks it end to end."""

    def __init__(self, service: RegistrationService, settings: ProjectSettings) -> None:
        self._service = service
        self._settings = settings
        self._name = settings.verify.test_mcp_name

    def suite(self) -> CheckSuite:
        return CheckSuite(
            "integration",
            [
                Check("MCP registration", self.check_register),
                Check("MCP list verification", self.check_listed_once),
                Check("MCP connection health", self.check_connected),
                Check("MCP cleanup", self.check_deregister),
            ],
        )

    async def check_register(self) -> CheckOutcome:
        command = spawn_command(self._settings, container_name=f"{self._name}-server")
        result = await self._service.register(self._name, command, self._settings.scope)
        return CheckOutcome.ok("replaced existing entry" if result.replaced else "")

    async def check_listed_once(self) -> CheckOutcome:
        status = await self._service.status(self._name)
        if not status.registered:
            return CheckOutcome.fail(f"{self._name} not in registration list")
        if status.count != 1:
            return CheckOutcome.fail(f"{status.count} entries for {self._name}")
        return CheckOutcome.ok()

    async def check_connected(self) -> CheckOutcome:
        status = await self._service.status(self._name)
        if status.connected:
            return CheckOutcome.ok(status.status)
        return CheckOutcome.fail(status.status or "not connected")

    async def check_deregister(self) -> CheckOutcome:
        outcome = await self._service.deregister(self._name)
        if outcome is not RemoveOutcome.REMOVED:
            return CheckOutcome.fail(f"{self._name} could not be removed")
        status = await self._service.status(self._name)
        if status.registered:
            return CheckOutcome.fail(f"{self._name} still listed after removal")
        return CheckOutcome.ok()
