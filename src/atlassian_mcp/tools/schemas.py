"""Input schemas for every tool the gateway advertises.

:func:`build_tool_descriptor` is a pure function of the tool name and the
settings. The only settings-dependent text is the ``jira_search`` ``fields``
description, which embeds the currently resolved default field list.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from atlassian_mcp.mcp.models import PropertySpec, ToolDescriptor, ToolInputSchema
from atlassian_mcp.tools.fields import resolve_search_fields

if TYPE_CHECKING:
    from atlassian_mcp.settings.models import GatewaySettings


def _string(description: str) -> PropertySpec:
    return PropertySpec(type="string", description=description)


def _number(description: str, default: int) -> PropertySpec:
    return PropertySpec(type="number", description=description, default=default)


def _union(description: str, *types: str) -> PropertySpec:
    return PropertySpec(type=list(types), description=description)


def _rich_text(subject: str) -> PropertySpec:
    return _union(
        f"{subject} - accepts plain text (string, auto-converted to ADF) or ADF object",
        "string",
        "object",
    )


def _search_fields_description(settings: GatewaySettings) -> str:
    resolved = resolve_search_fields(None, settings)
    return (
        "Optional: Array of field names to return. If not specified, returns "
        f"{len(resolved)} default fields: {', '.join(resolved)}\n\n"
        "To minimize tokens, specify only the fields you need "
        '(e.g., ["key","summary","status","assignee"]).'
    )


_Schema = tuple[str, dict[str, PropertySpec], list[str]]


def _jira_schema(name: str, settings: GatewaySettings) -> _Schema | None:
    if name == "jira_get_issue":
        return (
            "Get Jira issue by key",
            {"issue_key": _string("Issue key (e.g., 'PROJECT-123'). Case-sensitive.")},
            ["issue_key"],
        )
    if name == "jira_search":
        return (
            "Search Jira issues using JQL",
            {
                "jql": _string(
                    "JQL query. Must include search condition before ORDER BY "
                    "(e.g., 'project = KEY ORDER BY created DESC'). ORDER BY only works "
                    "with orderable fields (dates, versions)."
                ),
                "limit": _number("Maximum results (default: 20)", 20),
                "fields": PropertySpec(
                    type="array", description=_search_fields_description(settings)
                ),
            },
            ["jql"],
        )
    if name == "jira_create_issue":
        return (
            "Create Jira issue",
            {
                "project_key": _string("Project key"),
                "summary": _string("Issue summary"),
                "issue_type": _string("Issue type name (e.g., 'Task', 'Bug', 'Story')."),
                "description": _rich_text("Issue description"),
            },
            ["project_key", "summary", "issue_type"],
        )
    if name == "jira_update_issue":
        return (
            "Update Jira issue",
            {
                "issue_key": _string("Issue key"),
                "fields": PropertySpec(
                    type="object",
                    description=(
                        'Fields to update as JSON object (e.g., {"summary": "New title"}). '
                        "Custom fields use 'customfield_*' format. The 'description' field "
                        "accepts plain text (auto-converted to ADF) or ADF object."
                    ),
                ),
            },
            ["issue_key", "fields"],
        )
    if name == "jira_add_comment":
        return (
            "Add comment to Jira issue",
            {"issue_key": _string("Issue key"), "comment": _rich_text("Comment text")},
            ["issue_key", "comment"],
        )
    if name == "jira_update_comment":
        return (
            "Update an existing comment on a Jira issue with rich text formatting (ADF)",
            {
                "issue_key": _string("Issue key (e.g., 'PROJ-123')"),
                "comment_id": _string(
                    "Comment ID to update (obtained from comment object's 'id' field)"
                ),
                "body": _rich_text("Comment body"),
            },
            ["issue_key", "comment_id", "body"],
        )
    if name == "jira_transition_issue":
        return (
            "Transition Jira issue status",
            {
                "issue_key": _string("Issue key"),
                "transition_id": _string(
                    "Transition ID. Get available transition IDs using "
                    "jira_get_transitions for the issue's current status."
                ),
            },
            ["issue_key", "transition_id"],
        )
    if name == "jira_get_transitions":
        return (
            "Get Jira issue transitions",
            {"issue_key": _string("Issue key")},
            ["issue_key"],
        )
    return None


def _confluence_schema(name: str) -> _Schema | None:
    if name == "confluence_search":
        return (
            "Search Confluence using CQL",
            {
                "query": _string(
                    "CQL query. Format: field operator value "
                    "(e.g., 'type=page AND space=\"SPACE\"'). "
                    'Use text ~ "keyword" for text search.'
                ),
                "limit": _number("Max results", 10),
            },
            ["query"],
        )
    if name == "confluence_get_page":
        return ("Get Confluence page by ID", {"page_id": _string("Page ID")}, ["page_id"])
    if name == "confluence_get_page_children":
        return ("Get page child pages", {"page_id": _string("Page ID")}, ["page_id"])
    if name == "confluence_get_comments":
        return ("Get page comments", {"page_id": _string("Page ID")}, ["page_id"])
    if name == "confluence_create_page":
        return (
            "Create Confluence page",
            {
                "space_key": _string("Space key"),
                "title": _string("Page title"),
                "content": _string("Page content in HTML storage format."),
                "parent_id": _string("Parent page ID"),
            },
            ["space_key", "title", "content"],
        )
    if name == "confluence_update_page":
        return (
            "Update Confluence page",
            {
                "page_id": _string("Page ID"),
                "title": _string("Page title"),
                "content": _string("Page content in HTML storage format"),
                "version_number": _number(
                    "Version number (optional). Current version is automatically "
                    "retrieved and incremented.",
                    1,
                ),
            },
            ["page_id", "title", "content"],
        )
    return None


def build_tool_descriptor(name: str, settings: GatewaySettings) -> ToolDescriptor:
    """Return the descriptor advertised for *name* under *settings*.

    Names without a known schema get an ``"Unknown tool"`` descriptor with
    no properties.
    """
    schema = _jira_schema(name, settings) or _confluence_schema(name)
    if schema is None:
        return ToolDescriptor(name=name, description="Unknown tool")
    description, properties, required = schema
    return ToolDescriptor(
        name=name,
        description=description,
        input_schema=ToolInputSchema(properties=properties, required=required),
    )

