"""ToolDispatcher — executes a tool by name and shapes its result."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from atlassian_mcp.mcp.models import CallToolResult
from atlassian_mcp.tools.errors import ToolNotFoundError
from atlassian_mcp.tools.optimizer import ResponseOptimizer
from atlassian_mcp.utils.telemetry import ATTR_OPTIMIZED, ATTR_TOOL_NAME, get_tracer

if TYPE_CHECKING:
    from atlassian_mcp.mcp.models import ToolDescriptor
    from atlassian_mcp.settings.models import GatewaySettings
    from atlassian_mcp.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

# Tools whose results are optimized. Mutating tools already return minimal
# payloads and are never listed here.
READ_ONLY_TOOLS: frozenset[str] = frozenset(
    {
        "jira_get_issue",
        "jira_search",
        "jira_get_transitions",
        "confluence_search",
        "confluence_get_page",
        "confluence_get_page_children",
        "confluence_get_comments",
    }
)


def is_read_only(name: str) -> bool:
    return name in READ_ONLY_TOOLS


def to_text(value: Any) -> str:
    """Render a handler result as text: strings verbatim, JSON pretty-printed."""
    if isinstance(value, str):
        return value
    return json.dumps(value, indent=2, ensure_ascii=False)


class ToolDispatcher:
    """Looks up a handler, runs it and wraps the result for ``tools/call``.

    Usage::

        dispatcher = ToolDispatcher(registry, settings)
        descriptors = dispatcher.list_tools()
        result = await dispatcher.call_tool("jira_search", {"jql": "project = ABC"})
    """

    def __init__(
        self,
        registry: ToolRegistry,
        settings: GatewaySettings,
        optimizer: ResponseOptimizer | None = None,
    ) -> None:
        self._registry = registry
        self._settings = settings
        self._optimizer = optimizer or ResponseOptimizer.from_settings(settings)

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    @property
    def settings(self) -> GatewaySettings:
        return self._settings

    def list_tools(self) -> list[ToolDescriptor]:
        return self._registry.list_tools(self._settings)

    async def call_tool(
        self,
        name: str,
        arguments: dict[str, Any],
        settings: GatewaySettings | None = None,
    ) -> CallToolResult:
        """Run tool *name* with *arguments*.

        Raises:
            ToolNotFoundError: *name* is not registered.
            ToolError: Raised by the handler; propagated unchanged.
        """
        handler = self._registry.get(name)
        if handler is None:
            raise ToolNotFoundError(name)

        optimize = is_read_only(name)
        with _tracer.start_as_current_span("tools.call") as span:
            span.set_attribute(ATTR_TOOL_NAME, name)
            span.set_attribute(ATTR_OPTIMIZED, optimize)

            result = await handler.execute(arguments, settings or self._settings)
            if optimize:
                result = self._optimize(name, result)

        return CallToolResult.from_text(to_text(result))

    def _optimize(self, name: str, result: Any) -> Any:
        try:
            optimized, stats = self._optimizer.optimize_with_stats(result)
        except Exception:
            logger.warning(
                "Response optimization failed for %s, returning unoptimized response",
                name,
                exc_info=True,
            )
            return result
        logger.debug(
            "Optimized %s response: %d fields and %d empty strings removed",
            name,
            stats.fields_removed,
            stats.empty_strings_removed,
        )
        return optimized
