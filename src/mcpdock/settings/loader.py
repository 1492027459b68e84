"""Loading of the optional ``mcpdock.yaml`` project file."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from mcpdock.settings.errors import ConfigError
from mcpdock.settings.models import ProjectSettings

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "mcpdock.yaml"


class SettingsLoader:
    """Load and validate a project YAML file into :class:`ProjectSettings`."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def load(self) -> ProjectSettings:
        """Read YAML, interpolate env vars, and validate.

        Environment variables in the form ``${VAR}`` or ``$VAR`` are expanded
        using :func:`os.path.expandvars` before YAML parsing.  An empty file
        yields the defaults.

        Raises:
            ConfigError: On read errors, YAML parse errors or schema validation failures.
        """
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Cannot read {self._path}: {exc}") from exc

        expanded = os.path.expandvars(raw)

        try:
            data: Any = yaml.safe_load(expanded)
        except yaml.YAMLError as exc:
            raise ConfigError(f"YAML parse error: {exc}") from exc

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError("Config YAML must be a mapping")

        try:
            return ProjectSettings.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(str(exc)) from exc


def load_settings(path: Path | None = None) -> ProjectSettings:
    """Load *path*, or ``./mcpdock.yaml`` when present, or fall back to defaults."""
    if path is None:
        candidate = Path.cwd() / DEFAULT_CONFIG_NAME
        if not candidate.is_file():
            logger.debug("No %s found, using defaults", DEFAULT_CONFIG_NAME)
            return ProjectSettings()
        path = candidate
    logger.debug("Loading settings from %s", path)
    return SettingsLoader(path).load()
