"""Shared CLI fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

_SETTINGS_YAML = """\
atlassian_domain: acme.atlassian.net
atlassian_email: bot@acme.io
atlassian_api_token: secret-token
jira_projects_filter: [OPS]
jira_search_default_fields: [key, summary]
log_level: info
"""


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "gateway.yaml"
    path.write_text(_SETTINGS_YAML, encoding="utf-8")
    return path


@pytest.fixture
def broken_config(tmp_path: Path) -> Path:
    path = tmp_path / "broken.yaml"
    path.write_text("atlassian_domain: example.com\n", encoding="utf-8")
    return path
