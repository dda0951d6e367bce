"""Smoke test to verify the project scaffolding works."""

from __future__ import annotations


def test_import() -> None:
    import atlassian_mcp

    assert atlassian_mcp.__version__ == "0.1.0"


def test_cli_entrypoint() -> None:
    from atlassian_mcp.cli import main

    assert callable(main)


def test_lazy_import_from_package() -> None:
    import atlassian_mcp

    assert atlassian_mcp.GatewayServer is not None
    assert atlassian_mcp.GatewaySettings is not None
    assert atlassian_mcp.SettingsLoader is not None


def test_version_flag() -> None:
    from click.testing import CliRunner

    from atlassian_mcp.cli import main

    result = CliRunner().invoke(main, ["--version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output
