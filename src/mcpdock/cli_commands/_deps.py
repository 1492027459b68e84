"""Factories for the external-CLI adapters, patched out in tests."""

from __future__ import annotations

from mcpdock.registry.claude import ClaudeRegistrar
from mcpdock.registry.service import RegistrationService
from mcpdock.runtime.docker import DockerCLI


def make_docker() -> DockerCLI:
    return DockerCLI()


def make_registration_service() -> RegistrationService:
    return RegistrationService(ClaudeRegistrar())
