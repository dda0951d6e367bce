"""ToolHandler protocol — the uniform ``execute`` capability behind every tool.

Each registered tool is one handler object satisfying this protocol, so the
:class:`~atlassian_mcp.tools.dispatcher.ToolDispatcher` can invoke any tool
without knowing which Atlassian endpoint it talks to.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from atlassian_mcp.settings.models import GatewaySettings


@runtime_checkable
class ToolHandler(Protocol):
    """Performs one backend operation for a named tool."""

    async def execute(self, arguments: dict[str, Any], settings: GatewaySettings) -> Any:
        """Run the operation and return a JSON-compatible value.

        Raises:
            ToolExecutionError: On missing arguments or backend failure.
        """
        ...
