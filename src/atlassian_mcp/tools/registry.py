"""ToolRegistry — the static name-to-handler map behind ``tools/list``."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from atlassian_mcp.tools.provider import ToolHandler
from atlassian_mcp.tools.schemas import build_tool_descriptor

if TYPE_CHECKING:
    from collections.abc import Iterator

    import httpx

    from atlassian_mcp.mcp.models import ToolDescriptor
    from atlassian_mcp.settings.models import GatewaySettings

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Maps tool names to handlers.

    Usage::

        registry = ToolRegistry()
        registry.register("jira_get_issue", GetIssueHandler())

        handler = registry.get("jira_get_issue")
        descriptors = registry.list_tools(settings)
    """

    def __init__(self) -> None:
        self._handlers: dict[str, ToolHandler] = {}

    def register(self, name: str, handler: ToolHandler) -> None:
        """Add *handler* under *name*; names are unique."""
        if name in self._handlers:
            msg = f"Tool '{name}' is already registered"
            raise ValueError(msg)
        if not isinstance(handler, ToolHandler):
            msg = f"Handler for '{name}' does not implement execute()"
            raise TypeError(msg)
        self._handlers[name] = handler

    def get(self, name: str) -> ToolHandler | None:
        return self._handlers.get(name)

    def names(self) -> list[str]:
        return list(self._handlers)

    def list_tools(self, settings: GatewaySettings) -> list[ToolDescriptor]:
        """Build a descriptor for every registered tool, in registration order."""
        return [build_tool_descriptor(name, settings) for name in self._handlers]

    def __contains__(self, name: object) -> bool:
        return name in self._handlers

    def __iter__(self) -> Iterator[str]:
        return iter(self._handlers)

    def __len__(self) -> int:
        return len(self._handlers)


def create_default_registry(transport: httpx.AsyncBaseTransport | None = None) -> ToolRegistry:
    """Register the Jira and Confluence tools.

    *transport* is handed to every handler's HTTP client, which lets tests
    swap in :class:`httpx.MockTransport`.
    """
    from atlassian_mcp.tools import confluence, jira

    registry = ToolRegistry()
    for name, handler_cls in (*jira.HANDLERS.items(), *confluence.HANDLERS.items()):
        registry.register(name, handler_cls(transport=transport))
    logger.debug("Registered %d tools", len(registry))
    return registry
