"""Data models for the runtime layer."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ImageInfo(BaseModel):
    """What ``docker image inspect`` reports about a built image."""

    reference: str = Field(..., description="The name:tag that was inspected.")
    size_bytes: int = Field(..., description="Image size in bytes.")
    architecture: str = Field(..., description="Image architecture, e.g. 'arm64'.")
    os: str = Field(default="linux", description="Image operating system.")

    @property
    def size_mb(self) -> float:
        """Size in decimal megabytes, the unit ``docker images`` prints."""
        return self.size_bytes / 1_000_000


class ContainerLimits(BaseModel):
    """Resource limits applied to a container, as the runtime reports them."""

    memory_bytes: int = Field(..., description="HostConfig.Memory (0 = unlimited).")
    nano_cpus: int = Field(default=0, description="HostConfig.NanoCpus (0 = unlimited).")

    @property
    def cpus(self) -> float:
        return self.nano_cpus / 1_000_000_000


class ContainerSummary(BaseModel):
    """One row of ``docker ps``."""

    name: str
    status: str = ""
    image: str = ""
