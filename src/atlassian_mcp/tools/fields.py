"""Field resolution — which remote fields an outbound request asks for.

Pure logic, no I/O. Jira endpoints take a ``fields`` list resolved by
:class:`FieldResolutionConfig` (first match wins). Confluence v2 endpoints
express the same idea through ``include-*`` boolean parameters, modelled by
:class:`ConfluenceIncludes`.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from atlassian_mcp.settings.models import GatewaySettings

# Requested by jira_get_issue.
ESSENTIAL_FIELDS: tuple[str, ...] = (
    "id",
    "key",
    "summary",
    "description",
    "issuetype",
    "status",
    "priority",
    "assignee",
    "reporter",
    "creator",
    "created",
    "updated",
    "project",
)

# Requested by jira_search unless the caller or the configuration says otherwise.
DEFAULT_SEARCH_FIELDS: tuple[str, ...] = (
    "key",
    "summary",
    "status",
    "priority",
    "issuetype",
    "assignee",
    "reporter",
    "creator",
    "created",
    "updated",
    "duedate",
    "resolution",
    "project",
    "labels",
    "components",
    "parent",
    "description",
)


def _dedupe(names: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    result: list[str] = []
    for name in names:
        if name not in seen:
            seen.add(name)
            result.append(name)
    return result


class FieldResolutionConfig(BaseModel):
    """Inputs to field resolution for one call."""

    default_fields: list[str] = Field(default_factory=list)
    custom_fields: list[str] = Field(default_factory=list)
    override_fields: list[str] | None = None
    include_all: bool = False

    def resolve(self, api_fields: list[str] | None = None) -> list[str] | None:
        """Return the fields to request, or ``None`` for an unfiltered request.

        Resolution order:
        1. ``api_fields``: a non-empty caller list is used as-is.
        2. ``override_fields``: replaces the defaults; custom fields are not added.
        3. ``default_fields`` followed by ``custom_fields``, without duplicates.
        """
        if self.include_all:
            return None
        if api_fields:
            return list(api_fields)
        if self.override_fields:
            return list(self.override_fields)
        return _dedupe([*self.default_fields, *self.custom_fields])

    def with_additional_fields(self, additional: Iterable[str]) -> FieldResolutionConfig:
        """Return a copy with *additional* appended to the custom fields."""
        custom = _dedupe(
            [*self.custom_fields, *(f for f in additional if f not in self.default_fields)]
        )
        return self.model_copy(update={"custom_fields": custom})


def search_field_config(settings: GatewaySettings) -> FieldResolutionConfig:
    """Field configuration for ``jira_search``."""
    return FieldResolutionConfig(
        default_fields=list(DEFAULT_SEARCH_FIELDS),
        custom_fields=list(settings.jira_search_custom_fields),
        override_fields=settings.jira_search_default_fields,
    )


def resolve_search_fields(
    api_fields: list[str] | None, settings: GatewaySettings
) -> list[str]:
    """Resolve the ``fields`` list for a Jira search."""
    return search_field_config(settings).resolve(api_fields) or []


def issue_field_config(
    settings: GatewaySettings,
    *,
    include_all: bool = False,
    additional: Iterable[str] | None = None,
) -> FieldResolutionConfig:
    """Field configuration for ``jira_get_issue``."""
    config = FieldResolutionConfig(
        default_fields=list(ESSENTIAL_FIELDS),
        custom_fields=list(settings.jira_custom_fields),
        include_all=include_all,
    )
    if additional:
        config = config.with_additional_fields(additional)
    return config


# ---------------------------------------------------------------------------
# Confluence include-* parameters
# ---------------------------------------------------------------------------

_SEARCH_EXPAND = ("body.storage", "version")
_SEARCH_EXPAND_ALL = ("body.storage", "version", "space", "history", "metadata")


class ConfluenceIncludes(BaseModel):
    """Query parameters for Confluence v2 page endpoints."""

    body_format: str | None = "storage"
    include_version: bool = True
    include_labels: bool = False
    include_properties: bool = False
    include_operations: bool = False
    custom_includes: list[str] = Field(default_factory=list)
    include_all: bool = False

    @classmethod
    def all_fields(cls) -> ConfluenceIncludes:
        return cls(
            include_labels=True,
            include_properties=True,
            include_operations=True,
            include_all=True,
        )

    def with_additional_includes(self, additional: Iterable[str]) -> ConfluenceIncludes:
        return self.model_copy(
            update={"custom_includes": _dedupe([*self.custom_includes, *additional])}
        )

    def to_query_params(self) -> list[tuple[str, str]]:
        params: list[tuple[str, str]] = []
        if self.body_format:
            params.append(("body-format", self.body_format))
        if self.include_version:
            params.append(("include-version", "true"))
        if self.include_labels or self.include_all:
            params.append(("include-labels", "true"))
        if self.include_properties or self.include_all:
            params.append(("include-properties", "true"))
        if self.include_operations or self.include_all:
            params.append(("include-operations", "true"))
        for name in self.custom_includes:
            params.append((f"include-{name}", "true"))
        return params


def confluence_v2_params(
    settings: GatewaySettings,
    *,
    include_all: bool = False,
    additional: Iterable[str] | None = None,
) -> list[tuple[str, str]]:
    """Query parameters for a Confluence v2 page request."""
    if include_all:
        return ConfluenceIncludes.all_fields().to_query_params()
    includes = ConfluenceIncludes(custom_includes=list(settings.confluence_custom_includes))
    if additional:
        includes = includes.with_additional_includes(additional)
    return includes.to_query_params()


def confluence_search_expand(
    *, include_all: bool = False, additional: Iterable[str] | None = None
) -> str:
    """The ``expand`` value for the v1 Confluence search endpoint."""
    expand = list(_SEARCH_EXPAND_ALL if include_all else _SEARCH_EXPAND)
    return ",".join(_dedupe([*expand, *(additional or [])]))
