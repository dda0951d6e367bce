"""MCP models — JSON-RPC 2.0 envelopes and server-side MCP payloads.

Covers the handshake (``initialize``), tool discovery (``tools/list``) and
tool execution (``tools/call``) as seen from the serving side.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator

JSONRPC_VERSION = "2.0"

# Older and newer supported MCP protocol revisions.
PROTOCOL_VERSION = "2024-11-05"
PROTOCOL_VERSION_2025 = "2025-06-18"

RequestId = int | float | str

# ---------------------------------------------------------------------------
# JSON-RPC 2.0 envelope
# ---------------------------------------------------------------------------


class JsonRpcRequest(BaseModel):
    """A JSON-RPC 2.0 request or notification (``id`` absent or null)."""

    jsonrpc: str
    method: str
    params: Any = None
    id: RequestId | None = None

    @property
    def is_notification(self) -> bool:
        return self.id is None


class JsonRpcError(BaseModel):
    """A JSON-RPC 2.0 error object."""

    code: int
    message: str
    data: Any = None


class JsonRpcResponse(BaseModel):
    """A JSON-RPC 2.0 response message.

    ``result`` and ``error`` are mutually exclusive; a success response may
    carry a ``null`` result.
    """

    jsonrpc: str = JSONRPC_VERSION
    id: RequestId | None = None
    result: Any = None
    error: JsonRpcError | None = None

    @classmethod
    def success(cls, request_id: RequestId | None, result: Any) -> JsonRpcResponse:
        return cls(id=request_id, result=result)

    @classmethod
    def failure(cls, request_id: RequestId | None, error: JsonRpcError) -> JsonRpcResponse:
        return cls(id=request_id, error=error)

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def to_wire(self) -> dict[str, Any]:
        """Serialize to the on-the-wire dict (``id`` always present)."""
        wire: dict[str, Any] = {"jsonrpc": self.jsonrpc}
        if self.error is not None:
            wire["error"] = self.error.model_dump(exclude_none=True)
        else:
            wire["result"] = self.result
        wire["id"] = self.id
        return wire


# ---------------------------------------------------------------------------
# Handshake payloads
# ---------------------------------------------------------------------------


class ClientInfo(BaseModel):
    name: str
    version: str


class InitializeParams(BaseModel):
    """Parameters of an ``initialize`` request."""

    model_config = {"populate_by_name": True}

    protocol_version: str = Field(alias="protocolVersion")
    capabilities: dict[str, Any] = Field(default_factory=dict)
    client_info: ClientInfo | None = Field(default=None, alias="clientInfo")


class ServerCapabilities(BaseModel):
    tools: dict[str, Any] = Field(default_factory=dict)
    experimental: dict[str, Any] = Field(default_factory=dict)


class ServerInfo(BaseModel):
    name: str = "mcp-atlassian"
    version: str = "0.1.0"


class InitializeResult(BaseModel):
    model_config = {"populate_by_name": True}

    protocol_version: str = Field(alias="protocolVersion")
    capabilities: ServerCapabilities = Field(default_factory=ServerCapabilities)
    server_info: ServerInfo = Field(default_factory=ServerInfo, alias="serverInfo")


# ---------------------------------------------------------------------------
# Tool descriptors
# ---------------------------------------------------------------------------


class PropertySpec(BaseModel):
    """One property of a tool input schema; ``type`` may be a union."""

    model_config = {"populate_by_name": True}

    type: str | list[str]
    description: str | None = None
    default: Any = None
    enum_values: list[Any] | None = Field(default=None, alias="enum")


class ToolInputSchema(BaseModel):
    type: Literal["object"] = "object"
    properties: dict[str, PropertySpec] = Field(default_factory=dict)
    required: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _required_are_declared(self) -> ToolInputSchema:
        for name in self.required:
            if name not in self.properties:
                msg = f"required property '{name}' is not declared in properties"
                raise ValueError(msg)
        return self


class ToolDescriptor(BaseModel):
    """A tool as advertised by ``tools/list``."""

    model_config = {"populate_by_name": True}

    name: str
    description: str
    input_schema: ToolInputSchema = Field(default_factory=ToolInputSchema, alias="inputSchema")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class ListToolsResult(BaseModel):
    tools: list[ToolDescriptor] = Field(default_factory=list)

    def to_wire(self) -> dict[str, Any]:
        return {"tools": [tool.to_wire() for tool in self.tools]}


# ---------------------------------------------------------------------------
# tools/call payloads
# ---------------------------------------------------------------------------


class CallToolParams(BaseModel):
    """Parameters of a ``tools/call`` request."""

    name: str
    arguments: dict[str, Any] = Field(default_factory=dict)


class TextContent(BaseModel):
    """Plain text content part."""

    type: Literal["text"] = "text"
    text: str


class ImageContent(BaseModel):
    """Inline base64 image content part."""

    model_config = {"populate_by_name": True}

    type: Literal["image"] = "image"
    data: str
    mime_type: str = Field(alias="mimeType")


ToolContent = TextContent | ImageContent


class CallToolResult(BaseModel):
    content: list[ToolContent] = Field(default_factory=list)

    @classmethod
    def from_text(cls, text: str) -> CallToolResult:
        """Create a result with a single text content part."""
        parts: list[ToolContent] = [TextContent(text=text)]
        return cls(content=parts)

    @property
    def text(self) -> str:
        """Concatenated text of all text parts."""
        return "".join(part.text for part in self.content if isinstance(part, TextContent))

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
