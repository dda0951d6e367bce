"""Gateway settings: environment/YAML loading and validation."""

from atlassian_mcp.settings.errors import ConfigurationError
from atlassian_mcp.settings.loader import SettingsLoader
from atlassian_mcp.settings.models import GatewaySettings

__all__ = [
    "ConfigurationError",
    "GatewaySettings",
    "SettingsLoader",
]
