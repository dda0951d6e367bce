"""Shared fixtures."""

from __future__ import annotations

import pytest

from atlassian_mcp.settings.models import GatewaySettings


@pytest.fixture
def settings() -> GatewaySettings:
    return GatewaySettings(
        atlassian_domain="acme.atlassian.net",
        atlassian_email="bot@acme.io",
        atlassian_api_token="secret-token",
    )
