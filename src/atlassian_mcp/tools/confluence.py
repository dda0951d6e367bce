"""Confluence Cloud tools (v1 search, v2 pages)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from atlassian_mcp.tools.errors import BackendError
from atlassian_mcp.tools.fields import confluence_search_expand, confluence_v2_params
from atlassian_mcp.tools.http import AtlassianToolHandler

if TYPE_CHECKING:
    from atlassian_mcp.settings.models import GatewaySettings
    from atlassian_mcp.tools.http import AtlassianClient

_V1 = "/wiki/rest/api"
_V2 = "/wiki/api/v2"
_SPACE_CLAUSES = ("space ", "space=", "space in")


def scope_cql(cql: str, spaces: list[str]) -> str:
    """Restrict *cql* to *spaces* unless it already names a space."""
    if not spaces:
        return cql
    lowered = cql.lower()
    if any(clause in lowered for clause in _SPACE_CLAUSES):
        return cql
    quoted = ",".join(f'"{space}"' for space in spaces)
    return f"space IN ({quoted}) AND ({cql})"


class ConfluenceToolHandler(AtlassianToolHandler):
    """Adds the per-call ``include_all_fields`` / ``additional_expand`` knobs."""

    def page_params(
        self, arguments: dict[str, Any], settings: GatewaySettings
    ) -> list[tuple[str, str]]:
        return confluence_v2_params(
            settings,
            include_all=arguments.get("include_all_fields") is True,
            additional=self.optional_str_list(arguments, "additional_expand"),
        )


class SearchHandler(ConfluenceToolHandler):
    name = "confluence_search"

    async def run(
        self, client: AtlassianClient, arguments: dict[str, Any], settings: GatewaySettings
    ) -> Any:
        cql = self.require_str(arguments, "query")
        limit = self.optional_int(arguments, "limit", 10)
        expand = confluence_search_expand(
            include_all=arguments.get("include_all_fields") is True,
            additional=self.optional_str_list(arguments, "additional_expand"),
        )

        data = await client.get_json(
            f"{_V1}/search",
            params={
                "cql": scope_cql(cql, settings.confluence_spaces_filter),
                "limit": limit,
                "expand": expand,
            },
            error="Search failed",
        )
        data = data or {}
        return {"success": True, "results": data.get("results"), "total": data.get("totalSize")}


class GetPageHandler(ConfluenceToolHandler):
    name = "confluence_get_page"

    async def run(
        self, client: AtlassianClient, arguments: dict[str, Any], settings: GatewaySettings
    ) -> Any:
        page_id = self.require_str(arguments, "page_id")
        data = await client.get_json(
            f"{_V2}/pages/{page_id}",
            params=self.page_params(arguments, settings),
            error="Failed to get page",
        )
        return {"success": True, "page": data}


class GetPageChildrenHandler(ConfluenceToolHandler):
    name = "confluence_get_page_children"

    async def run(
        self, client: AtlassianClient, arguments: dict[str, Any], settings: GatewaySettings
    ) -> Any:
        page_id = self.require_str(arguments, "page_id")
        data = await client.get_json(
            f"{_V2}/pages/{page_id}/children",
            params=self.page_params(arguments, settings),
            error="Failed to get child pages",
        )
        return {"success": True, "children": (data or {}).get("results")}


class GetCommentsHandler(ConfluenceToolHandler):
    name = "confluence_get_comments"

    async def run(
        self, client: AtlassianClient, arguments: dict[str, Any], settings: GatewaySettings
    ) -> Any:
        page_id = self.require_str(arguments, "page_id")
        data = await client.get_json(
            f"{_V2}/pages/{page_id}/footer-comments",
            params=self.page_params(arguments, settings),
            error="Failed to get comments",
        )
        return {"success": True, "comments": (data or {}).get("results")}


class CreatePageHandler(ConfluenceToolHandler):
    name = "confluence_create_page"

    async def run(
        self, client: AtlassianClient, arguments: dict[str, Any], settings: GatewaySettings
    ) -> Any:
        space_key = self.require_str(arguments, "space_key")
        title = self.require_str(arguments, "title")
        content = self.require_str(arguments, "content")
        parent_id = self.optional_str(arguments, "parent_id")

        space_id = await self._space_id(client, space_key)
        body: dict[str, Any] = {
            "spaceId": space_id,
            "title": title,
            "body": {"representation": "storage", "value": content},
        }
        if parent_id:
            body["parentId"] = parent_id

        data = await client.post_json(
            f"{_V2}/pages",
            body,
            params=self.page_params(arguments, settings),
            error="Failed to create page",
        )
        return {"success": True, "page": data}

    @staticmethod
    async def _space_id(client: AtlassianClient, space_key: str) -> str:
        data = await client.get_json(
            f"{_V2}/spaces",
            params={"keys": space_key},
            error=f"Failed to get space ID for key '{space_key}'",
        )
        results = (data or {}).get("results") or []
        space_id = results[0].get("id") if results else None
        if not space_id:
            msg = f"Space '{space_key}' not found"
            raise BackendError(msg)
        return str(space_id)


class UpdatePageHandler(ConfluenceToolHandler):
    name = "confluence_update_page"

    async def run(
        self, client: AtlassianClient, arguments: dict[str, Any], settings: GatewaySettings
    ) -> Any:
        page_id = self.require_str(arguments, "page_id")
        title = self.require_str(arguments, "title")
        content = self.require_str(arguments, "content")

        current = await client.get_json(
            f"{_V2}/pages/{page_id}",
            params={"include-version": "true"},
            error="Failed to get page for update",
        )
        version = ((current or {}).get("version") or {}).get("number")
        if isinstance(version, bool) or not isinstance(version, int):
            msg = "Failed to get current version"
            raise BackendError(msg)

        data = await client.put_json(
            f"{_V2}/pages/{page_id}",
            {
                "id": page_id,
                "status": "current",
                "title": title,
                "body": {"representation": "storage", "value": content},
                "version": {"number": version + 1},
            },
            params=self.page_params(arguments, settings),
            error="Failed to update page",
        )
        return {"success": True, "page": data}


HANDLERS: dict[str, type[AtlassianToolHandler]] = {
    handler.name: handler
    for handler in (
        SearchHandler,
        GetPageHandler,
        GetPageChildrenHandler,
        GetCommentsHandler,
        CreatePageHandler,
        UpdatePageHandler,
    )
}
