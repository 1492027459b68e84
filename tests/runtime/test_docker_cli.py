"""Tests for DockerCLI (docker CLI mocked)."""

import json
from unittest.mock import AsyncMock, patch

import pytest

from mcpdock.runtime.docker import DockerCLI
from mcpdock.runtime.errors import BuildError, CommandError
from mcpdock.runtime.interfaces import ImageBuilder
from mcpdock.runtime.process import CommandResult


def _result(stdout: str = "", returncode: int = 0, stderr: str = "") -> CommandResult:
    return CommandResult(args=["docker"], returncode=returncode, stdout=stdout, stderr=stderr)


class TestImages:
    def test_satisfies_protocol(self) -> None:
        assert isinstance(DockerCLI(), ImageBuilder)

    async def test_build_pipes_dockerfile(self) -> None:
        with patch.object(DockerCLI, "_run", new_callable=AsyncMock) as mock_run:
            mock_run.return_value = _result()
            await DockerCLI().build("img:1", "FROM scratch\n")

        mock_run.assert_awaited_once_with(
            ["docker", "build", "-t", "img:1", "-"], stdin="FROM scratch\n"
        )

    async def test_build_with_platforms(self) -> None:
        with patch.object(DockerCLI, "_run", new_callable=AsyncMock) as mock_run:
            mock_run.return_value = _result()
            await DockerCLI().build("img:1", "FROM scratch\n", ["linux/arm64", "linux/amd64"])

        cmd = mock_run.call_args.args[0]
        assert cmd[:4] == ["docker", "build", "--platform", "linux/arm64,linux/amd64"]

    async def test_build_failure(self) -> None:
        with patch.object(DockerCLI, "_run", new_callable=AsyncMock) as mock_run:
            mock_run.side_effect = CommandError(["docker", "build"], 1, "no such image")
            with pytest.raises(BuildError, match="img:1: no such image"):
                await DockerCLI().build("img:1", "FROM nope\n")

    async def test_inspect_image(self) -> None:
        payload = json.dumps([{"Size": 150_000_000, "Architecture": "arm64", "Os": "linux"}])
        with patch.object(DockerCLI, "_run", new_callable=AsyncMock) as mock_run:
            mock_run.return_value = _result(payload)
            info = await DockerCLI().inspect_image("img:1")

        assert info is not None
        assert info.size_mb == 150.0
        assert info.architecture == "arm64"

    async def test_inspect_missing_image(self) -> None:
        with patch.object(DockerCLI, "_run", new_callable=AsyncMock) as mock_run:
            mock_run.return_value = _result(returncode=1, stderr="No such image")
            assert await DockerCLI().inspect_image("img:1") is None

    async def test_inspect_garbage(self) -> None:
        with patch.object(DockerCLI, "_run", new_callable=AsyncMock) as mock_run:
            mock_run.return_value = _result("[]")
            assert await DockerCLI().inspect_image("img:1") is None

    async def test_remove_image_reports_bool(self) -> None:
        with patch.object(DockerCLI, "_run", new_callable=AsyncMock) as mock_run:
            mock_run.return_value = _result(returncode=1)
            assert await DockerCLI().remove_image("img:1") is False


class TestContainers:
    def test_interactive_command(self) -> None:
        cmd = DockerCLI().interactive_command("img:1", ["--transport", "stdio"])
        assert cmd == ["docker", "run", "-i", "--rm", "img:1", "--transport", "stdio"]

    async def test_run_with_entrypoint(self) -> None:
        with patch.object(DockerCLI, "_run", new_callable=AsyncMock) as mock_run:
            mock_run.return_value = _result("app")
            result = await DockerCLI().run("img:1", ["-c", "whoami"], entrypoint="/bin/sh")

        assert result.stdout == "app"
        mock_run.assert_awaited_once_with(
            ["docker", "run", "--rm", "--entrypoint", "/bin/sh", "img:1", "-c", "whoami"],
            stdin=None,
            timeout=None,
            check=False,
        )

    async def test_run_detached_with_limits(self) -> None:
        with patch.object(DockerCLI, "_run", new_callable=AsyncMock) as mock_run:
            mock_run.return_value = _result("abc123")
            cid = await DockerCLI().run_detached(
                "img:1", ["-c", "sleep 5"], name="t", entrypoint="/bin/sh", memory="2g", cpus=1.0
            )

        assert cid == "abc123"
        assert mock_run.call_args.args[0] == [
            "docker", "run", "-d", "--name", "t",
            "--memory", "2g", "--cpus", "1",
            "--entrypoint", "/bin/sh",
            "img:1", "-c", "sleep 5",
        ]

    async def test_inspect_container_limits(self) -> None:
        with patch.object(DockerCLI, "_run", new_callable=AsyncMock) as mock_run:
            mock_run.return_value = _result("2147483648 1000000000")
            limits = await DockerCLI().inspect_container_limits("t")

        assert limits.memory_bytes == 2147483648
        assert limits.cpus == 1.0

    async def test_containers_for_image(self) -> None:
        rows = "srv\tUp 2 minutes\tcontext7-mcp:1.0\nother\tUp 1 second\tcontext7-mcp:1.0\n"
        with patch.object(DockerCLI, "_run", new_callable=AsyncMock) as mock_run:
            mock_run.return_value = _result(rows)
            containers = await DockerCLI().containers_for_image("context7-mcp:1.0")

        assert [c.name for c in containers] == ["srv", "other"]
        assert containers[0].status == "Up 2 minutes"
        assert "ancestor=context7-mcp:1.0" in mock_run.call_args.args[0]

    async def test_running_names(self) -> None:
        with patch.object(DockerCLI, "_run", new_callable=AsyncMock) as mock_run:
            mock_run.return_value = _result("a\nb\n")
            assert await DockerCLI().running_names() == ["a", "b"]

    async def test_force_remove(self) -> None:
        with patch.object(DockerCLI, "_run", new_callable=AsyncMock) as mock_run:
            mock_run.return_value = _result()
            assert await DockerCLI().remove_container("t", force=True) is True

        mock_run.assert_awaited_once_with(["docker", "rm", "-f", "t"], check=False)
