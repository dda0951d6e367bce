"""Settings error types."""

from __future__ import annotations


class ConfigurationError(Exception):
    """Raised when gateway settings cannot be read or fail validation."""
