"""Atlassian MCP gateway — Jira and Confluence tools over MCP stdio."""

from __future__ import annotations

from typing import TYPE_CHECKING

__version__ = "0.1.0"

if TYPE_CHECKING:
    from atlassian_mcp.mcp.server import GatewayServer as GatewayServer
    from atlassian_mcp.settings.loader import SettingsLoader as SettingsLoader
    from atlassian_mcp.settings.models import GatewaySettings as GatewaySettings

_LAZY_EXPORTS = {
    "GatewayServer": "atlassian_mcp.mcp.server",
    "GatewaySettings": "atlassian_mcp.settings.models",
    "SettingsLoader": "atlassian_mcp.settings.loader",
}


def __getattr__(name: str) -> object:
    module_path = _LAZY_EXPORTS.get(name)
    if module_path is not None:
        import importlib

        mod = importlib.import_module(module_path)
        return getattr(mod, name)
    raise AttributeError(f"module 'atlassian_mcp' has no attribute {name!r}")
