"""GatewaySettings — Atlassian credentials, limits, and field-selection knobs.

Every list-valued setting accepts either a real list (YAML) or a
comma-separated string (environment variables).
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

_LOG_LEVELS = {"trace", "debug", "info", "warning", "warn", "error", "critical"}


def _split_csv(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    if isinstance(value, (list, tuple)):
        return [str(part).strip() for part in value if str(part).strip()]
    return value


class GatewaySettings(BaseModel):
    """Validated runtime configuration for the gateway.

    Example YAML::

        atlassian_domain: acme.atlassian.net
        atlassian_email: bot@acme.io
        atlassian_api_token: ${ATLASSIAN_API_TOKEN}
        jira_projects_filter: [OPS, WEB]
        jira_search_custom_fields: [customfield_10015]
    """

    model_config = {"frozen": True}

    atlassian_domain: str
    atlassian_email: str
    atlassian_api_token: str

    max_connections: int = Field(default=100, ge=1, le=1000)
    request_timeout_ms: int = Field(default=30000, ge=100, le=60000)

    jira_projects_filter: list[str] = Field(default_factory=list)
    confluence_spaces_filter: list[str] = Field(default_factory=list)

    jira_search_default_fields: list[str] | None = Field(
        default=None,
        description="Replaces the built-in jira_search field list when set.",
    )
    jira_search_custom_fields: list[str] = Field(
        default_factory=list,
        description="Appended to the built-in jira_search field list.",
    )
    jira_custom_fields: list[str] = Field(
        default_factory=list,
        description="Extra customfield_* names requested by jira_get_issue.",
    )
    confluence_custom_includes: list[str] = Field(
        default_factory=list,
        description="Extra include-* flags sent to Confluence v2 endpoints.",
    )
    response_exclude_fields: list[str] | None = Field(
        default=None,
        description="Replaces the default optimizer exclude set when set.",
    )

    log_level: str = "warning"
    json_logs: bool = False

    @field_validator(
        "jira_projects_filter",
        "confluence_spaces_filter",
        "jira_search_custom_fields",
        "confluence_custom_includes",
        mode="before",
    )
    @classmethod
    def _parse_list(cls, value: Any) -> Any:
        return [] if value is None else _split_csv(value)

    @field_validator("jira_search_default_fields", "response_exclude_fields", mode="before")
    @classmethod
    def _parse_override(cls, value: Any) -> Any:
        parsed = _split_csv(value)
        # An empty override means "not configured".
        return parsed or None

    @field_validator("jira_custom_fields", mode="before")
    @classmethod
    def _parse_custom_fields(cls, value: Any) -> Any:
        parsed = [] if value is None else _split_csv(value)
        if not isinstance(parsed, list):
            return parsed
        valid: list[str] = []
        for name in parsed:
            if name.startswith("customfield_"):
                valid.append(name)
            else:
                logger.warning("Invalid custom field name ignored: %s", name)
        return valid

    @field_validator("atlassian_domain")
    @classmethod
    def _validate_domain(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value:
            msg = "Atlassian domain cannot be empty"
            raise ValueError(msg)
        host = value.removeprefix("https://").removeprefix("http://")
        if ".atlassian.net" not in host:
            msg = "Invalid Atlassian domain format"
            raise ValueError(msg)
        return value

    @field_validator("atlassian_email")
    @classmethod
    def _validate_email(cls, value: str) -> str:
        value = value.strip()
        if "@" not in value:
            msg = "Invalid Atlassian email"
            raise ValueError(msg)
        return value

    @field_validator("atlassian_api_token")
    @classmethod
    def _validate_token(cls, value: str) -> str:
        if not value.strip():
            msg = "API token cannot be empty"
            raise ValueError(msg)
        return value.strip()

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        level = value.strip().lower()
        if level not in _LOG_LEVELS:
            msg = f"Unknown log level: {value}"
            raise ValueError(msg)
        return level

    @property
    def base_url(self) -> str:
        """The site URL, always on ``https://``."""
        if self.atlassian_domain.startswith("https://"):
            return self.atlassian_domain
        if self.atlassian_domain.startswith("http://"):
            return "https://" + self.atlassian_domain.removeprefix("http://")
        return f"https://{self.atlassian_domain}"

    @property
    def request_timeout(self) -> float:
        """Request timeout in seconds."""
        return self.request_timeout_ms / 1000

    def redacted(self) -> dict[str, Any]:
        """Return the settings as a dict with the API token masked."""
        data = self.model_dump()
        data["atlassian_api_token"] = "***"
        return data
