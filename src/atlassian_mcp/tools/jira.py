"""Jira Cloud tools (REST API v3)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from atlassian_mcp.tools.errors import ToolArgumentError
from atlassian_mcp.tools.fields import issue_field_config, resolve_search_fields
from atlassian_mcp.tools.http import AtlassianToolHandler

if TYPE_CHECKING:
    from atlassian_mcp.settings.models import GatewaySettings
    from atlassian_mcp.tools.http import AtlassianClient

logger = logging.getLogger(__name__)

_API = "/rest/api/3"
_SKIP_RENDERED = "-renderedFields"
_PROJECT_CLAUSES = ("project ", "project=", "project in")


def scope_jql(jql: str, projects: list[str]) -> str:
    """Restrict *jql* to *projects* unless it already names a project."""
    if not projects:
        return jql
    lowered = jql.lower()
    if any(clause in lowered for clause in _PROJECT_CLAUSES):
        return jql
    quoted = ",".join(f'"{project}"' for project in projects)
    return f"project IN ({quoted}) AND ({jql})"


class GetIssueHandler(AtlassianToolHandler):
    name = "jira_get_issue"

    async def run(
        self, client: AtlassianClient, arguments: dict[str, Any], settings: GatewaySettings
    ) -> Any:
        issue_key = self.require_str(arguments, "issue_key")
        params: dict[str, Any] = {"expand": _SKIP_RENDERED}
        fields = issue_field_config(
            settings,
            include_all=arguments.get("include_all_fields") is True,
            additional=self.optional_str_list(arguments, "additional_fields"),
        ).resolve()
        if fields is not None:
            params["fields"] = ",".join(fields)

        data = await client.get_json(
            f"{_API}/issue/{issue_key}", params=params, error="Failed to get issue"
        )
        return {"success": True, "issue": data}


class SearchHandler(AtlassianToolHandler):
    name = "jira_search"

    async def run(
        self, client: AtlassianClient, arguments: dict[str, Any], settings: GatewaySettings
    ) -> Any:
        jql = self.require_str(arguments, "jql")
        limit = self.optional_int(arguments, "limit", 20)
        fields = resolve_search_fields(self.optional_str_list(arguments, "fields"), settings)
        logger.debug("Jira search with %d fields: %s", len(fields), ",".join(fields))

        data = await client.get_json(
            f"{_API}/search/jql",
            params={
                "jql": scope_jql(jql, settings.jira_projects_filter),
                "maxResults": limit,
                "fields": ",".join(fields),
                "expand": _SKIP_RENDERED,
            },
            error="Search failed",
        )
        data = data or {}
        return {"success": True, "issues": data.get("issues"), "total": data.get("total")}


class CreateIssueHandler(AtlassianToolHandler):
    name = "jira_create_issue"

    async def run(
        self, client: AtlassianClient, arguments: dict[str, Any], settings: GatewaySettings
    ) -> Any:
        fields: dict[str, Any] = {
            "project": {"key": self.require_str(arguments, "project_key")},
            "summary": self.require_str(arguments, "summary"),
            "issuetype": {"name": self.require_str(arguments, "issue_type")},
        }
        description = self.rich_text(arguments, "description", required=False)
        if description is not None:
            fields["description"] = description

        data = await client.post_json(
            f"{_API}/issue", {"fields": fields}, error="Failed to create issue"
        )
        return {"success": True, "issue": data}


class UpdateIssueHandler(AtlassianToolHandler):
    name = "jira_update_issue"

    async def run(
        self, client: AtlassianClient, arguments: dict[str, Any], settings: GatewaySettings
    ) -> Any:
        issue_key = self.require_str(arguments, "issue_key")
        fields = arguments.get("fields")
        if not isinstance(fields, dict):
            raise ToolArgumentError(self.name, "Missing fields")
        if isinstance(fields.get("description"), str):
            description = self.rich_text(fields, "description", required=False)
            fields = {**fields, "description": description}

        await client.put(
            f"{_API}/issue/{issue_key}", {"fields": fields}, error="Failed to update issue"
        )
        return {"success": True, "message": f"Issue {issue_key} updated"}


class AddCommentHandler(AtlassianToolHandler):
    name = "jira_add_comment"

    async def run(
        self, client: AtlassianClient, arguments: dict[str, Any], settings: GatewaySettings
    ) -> Any:
        issue_key = self.require_str(arguments, "issue_key")
        body = self.rich_text(arguments, "comment", required=True)

        data = await client.post_json(
            f"{_API}/issue/{issue_key}/comment", {"body": body}, error="Failed to add comment"
        )
        return {"success": True, "comment": data}


class UpdateCommentHandler(AtlassianToolHandler):
    name = "jira_update_comment"

    async def run(
        self, client: AtlassianClient, arguments: dict[str, Any], settings: GatewaySettings
    ) -> Any:
        issue_key = self.require_str(arguments, "issue_key")
        comment_id = self.require_str(arguments, "comment_id")
        body = self.rich_text(arguments, "body", required=True)

        data = await client.put_json(
            f"{_API}/issue/{issue_key}/comment/{comment_id}",
            {"body": body},
            error="Failed to update comment",
        )
        return {"success": True, "comment": data}


class TransitionIssueHandler(AtlassianToolHandler):
    name = "jira_transition_issue"

    async def run(
        self, client: AtlassianClient, arguments: dict[str, Any], settings: GatewaySettings
    ) -> Any:
        issue_key = self.require_str(arguments, "issue_key")
        transition_id = self.require_str(arguments, "transition_id")

        await client.post(
            f"{_API}/issue/{issue_key}/transitions",
            {"transition": {"id": transition_id}},
            error="Failed to transition issue",
        )
        return {"success": True, "message": f"Issue {issue_key} transitioned"}


class GetTransitionsHandler(AtlassianToolHandler):
    name = "jira_get_transitions"

    async def run(
        self, client: AtlassianClient, arguments: dict[str, Any], settings: GatewaySettings
    ) -> Any:
        issue_key = self.require_str(arguments, "issue_key")
        data = await client.get_json(
            f"{_API}/issue/{issue_key}/transitions", error="Failed to get transitions"
        )
        return {"success": True, "transitions": (data or {}).get("transitions")}


HANDLERS: dict[str, type[AtlassianToolHandler]] = {
    handler.name: handler
    for handler in (
        GetIssueHandler,
        SearchHandler,
        CreateIssueHandler,
        UpdateIssueHandler,
        AddCommentHandler,
        UpdateCommentHandler,
        TransitionIssueHandler,
        GetTransitionsHandler,
    )
}
