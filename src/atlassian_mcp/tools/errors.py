"""Shared error types for the tool layer."""

from __future__ import annotations


class ToolError(Exception):
    """Base error for all tool-layer failures."""


class ToolNotFoundError(ToolError):
    """Requested tool does not exist in the registry."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Tool not found: {name}")


class ToolExecutionError(ToolError):
    """A tool invocation failed, carrying the backend's message."""

    def __init__(self, name: str, detail: str = "") -> None:
        self.name = name
        self.detail = detail
        super().__init__(detail or f"Tool execution failed: {name}")


class ToolArgumentError(ToolExecutionError):
    """A required argument is missing or has the wrong type."""


class BackendError(Exception):
    """An Atlassian REST call failed (transport error or non-2xx status)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)
