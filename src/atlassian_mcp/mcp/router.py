"""ProtocolRouter — the MCP session state machine over JSON-RPC envelopes.

Every failure after the envelope is parsed becomes an error envelope that
carries the request id.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from atlassian_mcp.mcp.errors import (
    InternalError,
    InvalidParamsError,
    InvalidRequestError,
    MethodNotFoundError,
    ParseError,
    RpcError,
    ServerNotInitializedError,
)
from atlassian_mcp.mcp.models import (
    JSONRPC_VERSION,
    PROTOCOL_VERSION,
    PROTOCOL_VERSION_2025,
    CallToolParams,
    InitializeParams,
    InitializeResult,
    JsonRpcRequest,
    JsonRpcResponse,
    ListToolsResult,
    ServerInfo,
)
from atlassian_mcp.tools.errors import ToolError
from atlassian_mcp.utils.telemetry import ATTR_ERROR_CODE, ATTR_METHOD, ATTR_REQUEST_ID, get_tracer

if TYPE_CHECKING:
    from atlassian_mcp.mcp.session import SessionState
    from atlassian_mcp.tools.dispatcher import ToolDispatcher

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

INITIALIZED_METHODS = frozenset({"initialized", "notifications/initialized"})
SESSION_METHODS = frozenset({"tools/list", "tools/call", "prompts/list", "resources/list"})


def negotiate_protocol_version(requested: str | None) -> str:
    """Answer 2025-dated requests with the newer revision, anything else with the older one."""
    if requested is None or requested.startswith("2025"):
        return PROTOCOL_VERSION_2025
    return PROTOCOL_VERSION


class ProtocolRouter:
    """Validates envelopes and routes them by method name.

    Usage::

        router = ProtocolRouter(dispatcher, SessionState())
        response = await router.handle_line('{"jsonrpc":"2.0","method":"initialize","id":1}')
        if response is not None:
            print(json.dumps(response.to_wire()))
    """

    def __init__(
        self,
        dispatcher: ToolDispatcher,
        session: SessionState,
        server_info: ServerInfo | None = None,
    ) -> None:
        self._dispatcher = dispatcher
        self._session = session
        self._server_info = server_info or ServerInfo()

    @property
    def session(self) -> SessionState:
        return self._session

    async def handle_line(self, line: str) -> JsonRpcResponse | None:
        """Parse one line of input and handle it."""
        try:
            payload = json.loads(line)
        except ValueError:
            logger.warning("Failed to parse request: %.200s", line)
            return JsonRpcResponse.failure(None, ParseError().to_error())
        return await self.handle_message(payload)

    async def handle_message(self, payload: Any) -> JsonRpcResponse | None:
        """Handle a decoded message; ``None`` means nothing is sent back."""
        try:
            request = JsonRpcRequest.model_validate(payload)
        except ValidationError:
            logger.warning("Message is not a JSON-RPC request envelope")
            return JsonRpcResponse.failure(None, ParseError().to_error())

        if request.jsonrpc != JSONRPC_VERSION:
            error = InvalidRequestError(f"Unsupported JSON-RPC version: {request.jsonrpc}")
            return JsonRpcResponse.failure(request.id, error.to_error())

        with _tracer.start_as_current_span("mcp.request") as span:
            span.set_attribute(ATTR_METHOD, request.method)
            if request.id is not None:
                span.set_attribute(ATTR_REQUEST_ID, str(request.id))

            try:
                result = await self._route(request)
                response = JsonRpcResponse.success(request.id, result)
            except RpcError as exc:
                span.set_attribute(ATTR_ERROR_CODE, int(exc.code))
                response = JsonRpcResponse.failure(request.id, exc.to_error())
            except Exception as exc:
                logger.exception("Unexpected error handling %s", request.method)
                error = InternalError(str(exc))
                span.set_attribute(ATTR_ERROR_CODE, int(error.code))
                response = JsonRpcResponse.failure(request.id, error.to_error())

        if request.is_notification:
            if response.is_error:
                logger.debug("Dropping error for notification %s", request.method)
            return None
        return response

    async def _route(self, request: JsonRpcRequest) -> Any:
        method = request.method
        logger.debug("Handling %s", method)

        if method == "initialize":
            return self._initialize(request.params)
        if method in INITIALIZED_METHODS:
            if self._session.mark_initialized():
                logger.info("Client initialized")
            return None
        if method not in SESSION_METHODS:
            logger.warning("Unknown method: %s", method)
            raise MethodNotFoundError(method)

        if not self._session.initialized:
            raise ServerNotInitializedError()

        if method == "tools/list":
            return ListToolsResult(tools=self._dispatcher.list_tools()).to_wire()
        if method == "tools/call":
            return await self._call_tool(request.params)
        if method == "prompts/list":
            return {"prompts": []}
        return {"resources": []}

    def _initialize(self, params: Any) -> dict[str, Any]:
        requested: str | None = None
        if params is not None:
            try:
                init = InitializeParams.model_validate(params)
            except ValidationError:
                logger.debug("Unrecognised initialize params, using newest protocol version")
            else:
                requested = init.protocol_version
                if init.client_info is not None:
                    logger.info(
                        "Client %s %s connected", init.client_info.name, init.client_info.version
                    )

        result = InitializeResult(
            protocol_version=negotiate_protocol_version(requested),
            server_info=self._server_info,
        )
        return result.model_dump(by_alias=True)

    async def _call_tool(self, params: Any) -> dict[str, Any]:
        if params is None:
            raise InvalidParamsError("Missing params")
        try:
            call = CallToolParams.model_validate(params)
        except ValidationError as exc:
            msg = f"Invalid params: {exc.error_count()} validation error(s)"
            raise InvalidParamsError(msg) from exc

        logger.debug("Executing tool: %s", call.name)
        try:
            result = await self._dispatcher.call_tool(call.name, call.arguments)
        except ToolError as exc:
            logger.error("Tool execution failed: %s", exc)
            raise InternalError(str(exc)) from exc
        return result.to_wire()
