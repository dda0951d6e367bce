"""JSON-RPC error types raised while routing a message.

Each error knows its standard JSON-RPC code and converts itself into the
:class:`~atlassian_mcp.mcp.models.JsonRpcError` payload sent to the client.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any

from atlassian_mcp.mcp.models import JsonRpcError


class ErrorCode(IntEnum):
    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603


class RpcError(Exception):
    """Base error for all protocol-layer failures."""

    code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str, data: Any = None) -> None:
        self.message = message
        self.data = data
        super().__init__(message)

    def to_error(self) -> JsonRpcError:
        return JsonRpcError(code=int(self.code), message=self.message, data=self.data)


class ParseError(RpcError):
    """The line is not a JSON-RPC message."""

    code = ErrorCode.PARSE_ERROR

    def __init__(self, message: str = "Parse error", data: Any = None) -> None:
        super().__init__(message, data)


class InvalidRequestError(RpcError):
    """The envelope is JSON-RPC shaped but not acceptable (e.g. wrong version)."""

    code = ErrorCode.INVALID_REQUEST

    def __init__(self, message: str = "Invalid request", data: Any = None) -> None:
        super().__init__(message, data)


class MethodNotFoundError(RpcError):
    code = ErrorCode.METHOD_NOT_FOUND

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(f"Method not found: {method}")


class InvalidParamsError(RpcError):
    code = ErrorCode.INVALID_PARAMS


class InternalError(RpcError):
    code = ErrorCode.INTERNAL_ERROR


class ServerNotInitializedError(InternalError):
    """A session-gated method arrived before the ``initialized`` notification."""

    def __init__(self) -> None:
        super().__init__("Server not initialized")
