"""Tool layer: registry, dispatch, response optimization and Atlassian handlers."""

from atlassian_mcp.tools.dispatcher import READ_ONLY_TOOLS, ToolDispatcher, is_read_only
from atlassian_mcp.tools.errors import (
    BackendError,
    ToolArgumentError,
    ToolError,
    ToolExecutionError,
    ToolNotFoundError,
)
from atlassian_mcp.tools.optimizer import ResponseOptimizer
from atlassian_mcp.tools.provider import ToolHandler
from atlassian_mcp.tools.registry import ToolRegistry, create_default_registry

__all__ = [
    "READ_ONLY_TOOLS",
    "BackendError",
    "ResponseOptimizer",
    "ToolArgumentError",
    "ToolDispatcher",
    "ToolError",
    "ToolExecutionError",
    "ToolHandler",
    "ToolNotFoundError",
    "ToolRegistry",
    "create_default_registry",
    "is_read_only",
]
