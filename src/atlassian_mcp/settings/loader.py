"""Settings loading from the environment or a YAML file."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from atlassian_mcp.settings.errors import ConfigurationError
from atlassian_mcp.settings.models import GatewaySettings

# Setting name -> environment variable.
ENV_VARS: dict[str, str] = {
    "atlassian_domain": "ATLASSIAN_DOMAIN",
    "atlassian_email": "ATLASSIAN_EMAIL",
    "atlassian_api_token": "ATLASSIAN_API_TOKEN",
    "max_connections": "MAX_CONNECTIONS",
    "request_timeout_ms": "REQUEST_TIMEOUT_MS",
    "jira_projects_filter": "JIRA_PROJECTS_FILTER",
    "confluence_spaces_filter": "CONFLUENCE_SPACES_FILTER",
    "jira_search_default_fields": "JIRA_SEARCH_DEFAULT_FIELDS",
    "jira_search_custom_fields": "JIRA_SEARCH_CUSTOM_FIELDS",
    "jira_custom_fields": "JIRA_CUSTOM_FIELDS",
    "confluence_custom_includes": "CONFLUENCE_CUSTOM_INCLUDES",
    "response_exclude_fields": "RESPONSE_EXCLUDE_FIELDS",
    "log_level": "LOG_LEVEL",
    "json_logs": "JSON_LOGS",
}

_REQUIRED = ("atlassian_domain", "atlassian_email", "atlassian_api_token")


class SettingsLoader:
    """Build a :class:`GatewaySettings` from a YAML file or the environment.

    Usage::

        settings = SettingsLoader().load()                  # environment (+ .env)
        settings = SettingsLoader(Path("gw.yaml")).load()   # YAML file
    """

    def __init__(
        self,
        path: Path | None = None,
        *,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._path = path
        self._environ = environ

    def load(self) -> GatewaySettings:
        """Load and validate settings.

        Raises:
            ConfigurationError: When a source cannot be read or validation fails.
        """
        if self._path is not None:
            return self.from_file(self._path)
        return self.from_env(self._environ)

    @staticmethod
    def from_env(environ: Mapping[str, str] | None = None) -> GatewaySettings:
        """Read settings from environment variables.

        When *environ* is ``None`` a ``.env`` file in the working directory is
        loaded first (existing variables win) and ``os.environ`` is used.
        """
        if environ is None:
            load_dotenv(override=False)
            environ = os.environ

        for name in _REQUIRED:
            if not environ.get(ENV_VARS[name]):
                msg = f"{ENV_VARS[name]} environment variable not set"
                raise ConfigurationError(msg)

        data: dict[str, Any] = {
            name: environ[var] for name, var in ENV_VARS.items() if var in environ
        }
        return _validate(data)

    @staticmethod
    def from_file(path: Path) -> GatewaySettings:
        """Read a YAML settings file.

        ``${VAR}`` / ``$VAR`` references are expanded with
        :func:`os.path.expandvars` before parsing.
        """
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigurationError(f"Cannot read {path}: {exc}") from exc

        try:
            data: Any = yaml.safe_load(os.path.expandvars(raw))
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"YAML parse error: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigurationError("Settings YAML must be a mapping")
        return _validate(data)


def _validate(data: dict[str, Any]) -> GatewaySettings:
    try:
        return GatewaySettings.model_validate(data)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'settings'}: {err['msg']}"
            for err in exc.errors()
        )
        raise ConfigurationError(f"Invalid settings: {problems}") from exc
