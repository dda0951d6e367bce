"""Tests for SettingsLoader."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import patch

import pytest

if TYPE_CHECKING:
    from pathlib import Path

from atlassian_mcp.settings import ConfigurationError, SettingsLoader

_ENV = {
    "ATLASSIAN_DOMAIN": "acme.atlassian.net",
    "ATLASSIAN_EMAIL": "bot@acme.io",
    "ATLASSIAN_API_TOKEN": "secret-token",
}

_YAML = """\
atlassian_domain: acme.atlassian.net
atlassian_email: bot@acme.io
atlassian_api_token: ${ACME_TOKEN}
jira_projects_filter: [OPS, WEB]
max_connections: 10
"""


class TestFromEnv:
    def test_required_only(self) -> None:
        settings = SettingsLoader.from_env(_ENV)
        assert settings.atlassian_domain == "acme.atlassian.net"
        assert settings.max_connections == 100

    @pytest.mark.parametrize("missing", sorted(_ENV))
    def test_missing_required(self, missing: str) -> None:
        env = {k: v for k, v in _ENV.items() if k != missing}
        with pytest.raises(ConfigurationError, match=f"{missing} environment variable not set"):
            SettingsLoader.from_env(env)

    def test_optional_variables(self) -> None:
        env = {
            **_ENV,
            "MAX_CONNECTIONS": "25",
            "REQUEST_TIMEOUT_MS": "1000",
            "JIRA_PROJECTS_FILTER": "OPS,WEB",
            "JIRA_SEARCH_CUSTOM_FIELDS": "customfield_1",
            "RESPONSE_EXCLUDE_FIELDS": "self,expand",
            "LOG_LEVEL": "info",
            "JSON_LOGS": "true",
        }
        settings = SettingsLoader.from_env(env)
        assert settings.max_connections == 25
        assert settings.request_timeout_ms == 1000
        assert settings.jira_projects_filter == ["OPS", "WEB"]
        assert settings.jira_search_custom_fields == ["customfield_1"]
        assert settings.response_exclude_fields == ["self", "expand"]
        assert settings.log_level == "info"
        assert settings.json_logs is True

    def test_invalid_value_wrapped(self) -> None:
        with pytest.raises(ConfigurationError, match="max_connections"):
            SettingsLoader.from_env({**_ENV, "MAX_CONNECTIONS": "0"})

    def test_loads_dotenv_when_no_mapping_given(self) -> None:
        with (
            patch("atlassian_mcp.settings.loader.load_dotenv") as mock_dotenv,
            patch.dict("os.environ", _ENV, clear=True),
        ):
            settings = SettingsLoader().load()
        mock_dotenv.assert_called_once_with(override=False)
        assert settings.atlassian_email == "bot@acme.io"


class TestFromFile:
    def test_load_with_env_expansion(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ACME_TOKEN", "from-env")
        f = tmp_path / "gateway.yaml"
        f.write_text(_YAML)
        settings = SettingsLoader(f).load()
        assert settings.atlassian_api_token == "from-env"
        assert settings.jira_projects_filter == ["OPS", "WEB"]
        assert settings.max_connections == 10

    def test_file_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="Cannot read"):
            SettingsLoader(tmp_path / "missing.yaml").load()

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        f = tmp_path / "bad.yaml"
        f.write_text("{{{{invalid")
        with pytest.raises(ConfigurationError, match="YAML parse error"):
            SettingsLoader(f).load()

    def test_yaml_not_mapping(self, tmp_path: Path) -> None:
        f = tmp_path / "list.yaml"
        f.write_text("- item1\n- item2\n")
        with pytest.raises(ConfigurationError, match="must be a mapping"):
            SettingsLoader(f).load()

    def test_validation_error(self, tmp_path: Path) -> None:
        f = tmp_path / "incomplete.yaml"
        f.write_text("atlassian_domain: acme.atlassian.net\n")
        with pytest.raises(ConfigurationError, match="Invalid settings"):
            SettingsLoader(f).load()
