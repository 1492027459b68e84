"""Project settings — YAML file, models and Dockerfile rendering."""

from mcpdock.settings.dockerfile import render_dockerfile
from mcpdock.settings.errors import ConfigError
from mcpdock.settings.loader import SettingsLoader, load_settings
from mcpdock.settings.models import (
    CPU_LIMIT,
    MEMORY_LIMIT,
    ContainerSettings,
    ImageSettings,
    ProjectSettings,
    SecretSettings,
    TelemetrySettings,
    VerifySettings,
)

__all__ = [
    "CPU_LIMIT",
    "MEMORY_LIMIT",
    "ConfigError",
    "ContainerSettings",
    "ImageSettings",
    "ProjectSettings",
    "SecretSettings",
    "SettingsLoader",
    "TelemetrySettings",
    "VerifySettings",
    "load_settings",
    "render_dockerfile",
]
