"""Pydantic models for the ``mcpdock.yaml`` project file."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from mcpdock.runtime.docker import parse_memory

# Fixed resource ceiling carried by every spawn command line.
MEMORY_LIMIT = "2g"
CPU_LIMIT = 1.0

# Smallest memory limit the Docker daemon accepts.
MIN_MEMORY_BYTES = 6 * 1024**2


class ImageSettings(BaseModel):
    """What goes into the container image and how it is tagged."""

    name: str = "context7-mcp"
    tag: str = "1.0"
    base_image: str = "node:20-alpine"
    package: str = "@upstash/context7-mcp@^1.0.0"
    executable: str = "context7-mcp"
    platforms: list[str] = Field(default_factory=lambda: ["linux/arm64", "linux/amd64"])
    user: str = "app"
    workdir: str = "/app"
    default_args: list[str] = Field(default_factory=lambda: ["--transport", "stdio"])
    labels: dict[str, str] = Field(
        default_factory=lambda: {
            "maintainer": "jack@example.com",
            "description": "Context7 MCP Server for Claude Code",
            "version": "1.0.0",
        }
    )

    @property
    def reference(self) -> str:
        """``name:tag`` as passed to ``docker run``."""
        return f"{self.name}:{self.tag}"


class ContainerSettings(BaseModel):
    """How the host spawns the server container."""

    name: str = "context7-mcp-server"
    memory: str = MEMORY_LIMIT
    cpus: float = CPU_LIMIT
    server_args: list[str] = []

    @field_validator("memory")
    @classmethod
    def _check_memory(cls, value: str) -> str:
        try:
            size = parse_memory(value)
        except ValueError:
            msg = f"memory must be a Docker size such as '2g', got {value!r}"
            raise ValueError(msg) from None
        if size < MIN_MEMORY_BYTES:
            msg = f"memory must be at least 6m, got {value!r}"
            raise ValueError(msg)
        return value.strip().lower()

    @field_validator("cpus")
    @classmethod
    def _check_cpus(cls, value: float) -> float:
        if value <= 0:
            msg = "cpus must be positive"
            raise ValueError(msg)
        return value


class SecretSettings(BaseModel):
    """Optional API key file mounted read-only into the container."""

    host_path: Path = Path("~/.context7/api_key")
    container_path: str = "/run/secrets/context7_api_key"

    def resolved_host_path(self) -> Path:
        return self.host_path.expanduser()


class VerifySettings(BaseModel):
    """Thresholds and names used by the verification suites."""

    max_image_size_mb: float = 300
    architectures: list[str] = Field(default_factory=lambda: ["arm64", "amd64"])
    required_tools: list[str] = Field(
        default_factory=lambda: ["resolve-library-id", "get-library-docs"]
    )
    probe_timeout: float = 10.0
    test_mcp_name: str = "context7-test"
    test_image: str = "context7-mcp-test:latest"
    help_marker: str = "transport"


class TelemetrySettings(BaseModel):
    """Optional telemetry configuration."""

    enabled: bool = False
    otlp_endpoint: str | None = None


class ProjectSettings(BaseModel):
    """Top-level project configuration; every field has a working default."""

    mcp_name: str = "context7"
    scope: Literal["user", "project"] = "user"
    image: ImageSettings = Field(default_factory=ImageSettings)
    container: ContainerSettings = Field(default_factory=ContainerSettings)
    secret: SecretSettings = Field(default_factory=SecretSettings)
    verify: VerifySettings = Field(default_factory=VerifySettings)
    telemetry: TelemetrySettings = Field(default_factory=TelemetrySettings)
