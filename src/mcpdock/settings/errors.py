"""Settings error types."""

from __future__ import annotations


class ConfigError(Exception):
    """Raised when a project config file fails parsing or validation."""
