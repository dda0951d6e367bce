"""MCP protocol: JSON-RPC envelopes, session handshake and the stdio server side."""

from atlassian_mcp.mcp.errors import (
    ErrorCode,
    InternalError,
    InvalidParamsError,
    InvalidRequestError,
    MethodNotFoundError,
    ParseError,
    RpcError,
    ServerNotInitializedError,
)
from atlassian_mcp.mcp.models import (
    PROTOCOL_VERSION,
    PROTOCOL_VERSION_2025,
    CallToolResult,
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
    ToolDescriptor,
)
from atlassian_mcp.mcp.session import SessionState

__all__ = [
    "PROTOCOL_VERSION",
    "PROTOCOL_VERSION_2025",
    "CallToolResult",
    "ErrorCode",
    "InternalError",
    "InvalidParamsError",
    "InvalidRequestError",
    "JsonRpcError",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "MethodNotFoundError",
    "ParseError",
    "RpcError",
    "ServerNotInitializedError",
    "SessionState",
    "ToolDescriptor",
]
