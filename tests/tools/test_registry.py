"""Tests for ToolRegistry."""

from __future__ import annotations

from typing import Any

import pytest

from atlassian_mcp.settings.models import GatewaySettings
from atlassian_mcp.tools.dispatcher import READ_ONLY_TOOLS
from atlassian_mcp.tools.provider import ToolHandler
from atlassian_mcp.tools.registry import ToolRegistry, create_default_registry

_ALL_TOOLS = {
    "jira_get_issue",
    "jira_search",
    "jira_create_issue",
    "jira_update_issue",
    "jira_add_comment",
    "jira_update_comment",
    "jira_transition_issue",
    "jira_get_transitions",
    "confluence_search",
    "confluence_get_page",
    "confluence_get_page_children",
    "confluence_get_comments",
    "confluence_create_page",
    "confluence_update_page",
}


class EchoHandler:
    async def execute(self, arguments: dict[str, Any], settings: GatewaySettings) -> Any:
        return arguments


class TestToolRegistry:
    def test_register_and_get(self) -> None:
        registry = ToolRegistry()
        handler = EchoHandler()
        registry.register("echo", handler)
        assert registry.get("echo") is handler
        assert "echo" in registry
        assert len(registry) == 1
        assert registry.names() == ["echo"]

    def test_get_unknown(self) -> None:
        assert ToolRegistry().get("missing") is None

    def test_duplicate_rejected(self) -> None:
        registry = ToolRegistry()
        registry.register("echo", EchoHandler())
        with pytest.raises(ValueError, match="already registered"):
            registry.register("echo", EchoHandler())

    def test_handler_must_execute(self) -> None:
        with pytest.raises(TypeError, match="execute"):
            ToolRegistry().register("bad", object())  # type: ignore[arg-type]

    def test_list_tools_in_registration_order(self, settings: GatewaySettings) -> None:
        registry = ToolRegistry()
        registry.register("jira_search", EchoHandler())
        registry.register("custom", EchoHandler())
        descriptors = registry.list_tools(settings)
        assert [d.name for d in descriptors] == ["jira_search", "custom"]
        assert descriptors[1].description == "Unknown tool"

    def test_echo_satisfies_protocol(self) -> None:
        assert isinstance(EchoHandler(), ToolHandler)


class TestDefaultRegistry:
    def test_fourteen_tools(self) -> None:
        registry = create_default_registry()
        assert len(registry) == 14
        assert set(registry) == _ALL_TOOLS

    def test_read_only_tools_are_registered(self) -> None:
        registry = create_default_registry()
        assert READ_ONLY_TOOLS <= set(registry)
        assert len(READ_ONLY_TOOLS) == 7

    def test_handlers_satisfy_protocol(self) -> None:
        registry = create_default_registry()
        for name in registry:
            assert isinstance(registry.get(name), ToolHandler)
