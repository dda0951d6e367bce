"""HTTP plumbing shared by the Jira and Confluence handlers."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Any, ClassVar

import httpx

from atlassian_mcp.tools.errors import BackendError, ToolArgumentError, ToolExecutionError

if TYPE_CHECKING:
    from atlassian_mcp.settings.models import GatewaySettings

logger = logging.getLogger(__name__)

QueryParams = dict[str, Any] | list[tuple[str, Any]]


class AtlassianClient:
    """Authenticated async client for one Atlassian Cloud site.

    Usage::

        async with AtlassianClient(settings) as client:
            issue = await client.get_json("/rest/api/3/issue/ABC-1", error="Failed to get issue")
    """

    def __init__(
        self,
        settings: GatewaySettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> AtlassianClient:
        self._client = httpx.AsyncClient(
            base_url=self._settings.base_url,
            auth=(self._settings.atlassian_email, self._settings.atlassian_api_token),
            timeout=self._settings.request_timeout,
            limits=httpx.Limits(max_connections=self._settings.max_connections),
            headers={"Accept": "application/json"},
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *_: object) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    def _http(self) -> httpx.AsyncClient:
        if self._client is None:
            msg = "AtlassianClient must be used as an async context manager"
            raise RuntimeError(msg)
        return self._client

    async def request(
        self,
        method: str,
        path: str,
        *,
        error: str,
        params: QueryParams | None = None,
        json: Any = None,
    ) -> httpx.Response:
        """Send a request; non-2xx statuses and transport failures raise.

        Raises:
            BackendError: Message is ``"<error>: <status or cause>"``.
        """
        try:
            response = await self._http().request(method, path, params=params, json=json)
        except httpx.HTTPError as exc:
            raise BackendError(f"{error}: {exc}") from exc

        if not response.is_success:
            detail = response.text.strip() or response.reason_phrase
            logger.debug("%s %s -> %d", method, path, response.status_code)
            raise BackendError(
                f"{error}: {response.status_code} {detail}", status_code=response.status_code
            )
        return response

    async def get_json(self, path: str, *, error: str, params: QueryParams | None = None) -> Any:
        response = await self.request("GET", path, error=error, params=params)
        return _json_body(response, error)

    async def post_json(
        self, path: str, body: Any, *, error: str, params: QueryParams | None = None
    ) -> Any:
        response = await self.request("POST", path, error=error, params=params, json=body)
        return _json_body(response, error)

    async def put_json(
        self, path: str, body: Any, *, error: str, params: QueryParams | None = None
    ) -> Any:
        response = await self.request("PUT", path, error=error, params=params, json=body)
        return _json_body(response, error)

    async def put(self, path: str, body: Any, *, error: str) -> None:
        """PUT where the response body (often ``204 No Content``) is ignored."""
        await self.request("PUT", path, error=error, json=body)

    async def post(self, path: str, body: Any, *, error: str) -> None:
        await self.request("POST", path, error=error, json=body)


def _json_body(response: httpx.Response, error: str) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError as exc:
        raise BackendError(f"{error}: response is not JSON") from exc


def to_adf(text: str) -> dict[str, Any]:
    """Wrap plain text into a single-paragraph Atlassian Document Format doc."""
    return {
        "type": "doc",
        "version": 1,
        "content": [
            {
                "type": "paragraph",
                "content": [{"type": "text", "text": text}],
            }
        ],
    }


class AtlassianToolHandler:
    """Base class for handlers that make Atlassian REST calls.

    Subclasses set :attr:`name` and implement :meth:`run`; :meth:`execute`
    opens a client and turns :class:`BackendError` into
    :class:`ToolExecutionError` carrying the backend message.
    """

    name: ClassVar[str] = ""

    def __init__(self, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._transport = transport

    async def execute(self, arguments: dict[str, Any], settings: GatewaySettings) -> Any:
        async with AtlassianClient(settings, transport=self._transport) as client:
            try:
                return await self.run(client, arguments, settings)
            except BackendError as exc:
                raise ToolExecutionError(self.name, str(exc)) from exc

    async def run(
        self,
        client: AtlassianClient,
        arguments: dict[str, Any],
        settings: GatewaySettings,
    ) -> Any:
        raise NotImplementedError

    # -- argument helpers --------------------------------------------------

    def require_str(self, arguments: dict[str, Any], key: str) -> str:
        value = arguments.get(key)
        if not isinstance(value, str) or not value:
            raise ToolArgumentError(self.name, f"Missing {key}")
        return value

    def optional_str(self, arguments: dict[str, Any], key: str) -> str | None:
        value = arguments.get(key)
        if value is None:
            return None
        if not isinstance(value, str):
            raise ToolArgumentError(self.name, f"{key} must be a string")
        return value or None

    def optional_int(self, arguments: dict[str, Any], key: str, default: int) -> int:
        value = arguments.get(key)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return default
        if isinstance(value, float) and not math.isfinite(value):
            return default
        if value <= 0:
            return default
        return int(value)

    def optional_str_list(self, arguments: dict[str, Any], key: str) -> list[str] | None:
        value = arguments.get(key)
        if not isinstance(value, list):
            return None
        return [item for item in value if isinstance(item, str)]

    def rich_text(self, arguments: dict[str, Any], key: str, *, required: bool) -> Any:
        """Read an ADF-capable argument: strings are wrapped, objects pass through."""
        value = arguments.get(key)
        if value is None or value == "":
            if required:
                raise ToolArgumentError(self.name, f"Missing {key}")
            return None
        if isinstance(value, str):
            return to_adf(value)
        if isinstance(value, dict):
            return value
        raise ToolArgumentError(self.name, f"{key} must be a string or an ADF object")
