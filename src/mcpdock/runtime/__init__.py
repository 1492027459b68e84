"""Runtime layer — external command execution and the docker adapter."""

from mcpdock.runtime.docker import DockerCLI, parse_memory, spawn_command
from mcpdock.runtime.interfaces import ImageBuilder, ProcessRegistrar
from mcpdock.runtime.models import ContainerLimits, ContainerSummary, ImageInfo
from mcpdock.runtime.process import CommandResult, run_command

__all__ = [
    "CommandResult",
    "ContainerLimits",
    "ContainerSummary",
    "DockerCLI",
    "ImageBuilder",
    "ImageInfo",
    "ProcessRegistrar",
    "parse_memory",
    "run_command",
    "spawn_command",
]
