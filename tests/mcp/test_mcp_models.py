"""Tests for the JSON-RPC and MCP payload models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from atlassian_mcp.mcp.models import (
    CallToolParams,
    CallToolResult,
    ImageContent,
    InitializeParams,
    InitializeResult,
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
    ListToolsResult,
    PropertySpec,
    TextContent,
    ToolDescriptor,
    ToolInputSchema,
)


class TestJsonRpcRequest:
    def test_request_with_id(self) -> None:
        req = JsonRpcRequest.model_validate(
            {"jsonrpc": "2.0", "method": "tools/list", "id": 7}
        )
        assert req.id == 7
        assert req.params is None
        assert not req.is_notification

    def test_notification_without_id(self) -> None:
        req = JsonRpcRequest.model_validate({"jsonrpc": "2.0", "method": "initialized"})
        assert req.is_notification

    def test_null_id_is_notification(self) -> None:
        req = JsonRpcRequest.model_validate({"jsonrpc": "2.0", "method": "x", "id": None})
        assert req.is_notification

    def test_string_id(self) -> None:
        req = JsonRpcRequest.model_validate({"jsonrpc": "2.0", "method": "x", "id": "abc"})
        assert req.id == "abc"

    def test_method_required(self) -> None:
        with pytest.raises(ValidationError):
            JsonRpcRequest.model_validate({"jsonrpc": "2.0", "id": 1})


class TestJsonRpcResponse:
    def test_success_wire_shape(self) -> None:
        wire = JsonRpcResponse.success(1, {"ok": True}).to_wire()
        assert wire == {"jsonrpc": "2.0", "result": {"ok": True}, "id": 1}
        assert "error" not in wire

    def test_null_result_kept(self) -> None:
        wire = JsonRpcResponse.success(3, None).to_wire()
        assert wire == {"jsonrpc": "2.0", "result": None, "id": 3}

    def test_failure_wire_shape(self) -> None:
        error = JsonRpcError(code=-32601, message="Method not found: x")
        response = JsonRpcResponse.failure(None, error)
        assert response.is_error
        wire = response.to_wire()
        assert wire == {
            "jsonrpc": "2.0",
            "error": {"code": -32601, "message": "Method not found: x"},
            "id": None,
        }
        assert "result" not in wire


class TestInitialize:
    def test_params_aliases(self) -> None:
        params = InitializeParams.model_validate(
            {
                "protocolVersion": "2025-06-18",
                "clientInfo": {"name": "claude", "version": "1.0"},
            }
        )
        assert params.protocol_version == "2025-06-18"
        assert params.client_info is not None
        assert params.client_info.name == "claude"
        assert params.capabilities == {}

    def test_result_dump(self) -> None:
        dumped = InitializeResult(protocol_version="2024-11-05").model_dump(by_alias=True)
        assert dumped == {
            "protocolVersion": "2024-11-05",
            "capabilities": {"tools": {}, "experimental": {}},
            "serverInfo": {"name": "mcp-atlassian", "version": "0.1.0"},
        }


class TestToolDescriptor:
    def test_required_must_be_declared(self) -> None:
        with pytest.raises(ValidationError, match="not declared"):
            ToolInputSchema(properties={"a": PropertySpec(type="string")}, required=["b"])

    def test_wire_uses_aliases_and_drops_nulls(self) -> None:
        descriptor = ToolDescriptor(
            name="t",
            description="demo",
            input_schema=ToolInputSchema(
                properties={
                    "q": PropertySpec(type="string", description="query"),
                    "n": PropertySpec(type="number", default=5),
                    "body": PropertySpec(type=["string", "object"]),
                    "mode": PropertySpec(type="string", enum_values=["a", "b"]),
                },
                required=["q"],
            ),
        )
        wire = descriptor.to_wire()
        assert wire["inputSchema"]["type"] == "object"
        assert wire["inputSchema"]["required"] == ["q"]
        props = wire["inputSchema"]["properties"]
        assert props["q"] == {"type": "string", "description": "query"}
        assert props["n"] == {"type": "number", "default": 5}
        assert props["body"] == {"type": ["string", "object"]}
        assert props["mode"]["enum"] == ["a", "b"]

    def test_list_tools_result(self) -> None:
        wire = ListToolsResult(tools=[ToolDescriptor(name="t", description="d")]).to_wire()
        assert wire["tools"][0]["name"] == "t"
        assert wire["tools"][0]["inputSchema"] == {
            "type": "object",
            "properties": {},
            "required": [],
        }


class TestCallTool:
    def test_params_default_arguments(self) -> None:
        params = CallToolParams.model_validate({"name": "jira_search"})
        assert params.arguments == {}

    def test_params_reject_non_object_arguments(self) -> None:
        with pytest.raises(ValidationError):
            CallToolParams.model_validate({"name": "x", "arguments": [1, 2]})

    def test_result_from_text(self) -> None:
        result = CallToolResult.from_text("hello")
        assert result.text == "hello"
        assert result.to_wire() == {"content": [{"type": "text", "text": "hello"}]}

    def test_image_content_alias(self) -> None:
        result = CallToolResult(
            content=[TextContent(text="a"), ImageContent(data="AAA", mime_type="image/png")]
        )
        wire = result.to_wire()
        assert wire["content"][1] == {"type": "image", "data": "AAA", "mimeType": "image/png"}
        assert result.text == "a"
