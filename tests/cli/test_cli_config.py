"""Tests for ``atlassian-mcp config`` CLI command."""

from __future__ import annotations

from pathlib import Path

from click.testing import CliRunner

from atlassian_mcp.cli import main


class TestConfigCommand:
    def test_table_masks_token(self, config_file: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["config", "--config", str(config_file)])

        assert result.exit_code == 0
        assert "Settings valid" in result.output
        assert "https://acme.atlassian.net" in result.output
        assert "secret-token" not in result.output

    def test_json(self, config_file: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["config", "--config", str(config_file), "--json"])

        assert result.exit_code == 0
        assert '"atlassian_api_token": "***"' in result.output
        assert '"log_level": "info"' in result.output
        assert "secret-token" not in result.output

    def test_from_environment(self, monkeypatch, tmp_path: Path) -> None:
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("ATLASSIAN_DOMAIN", "env.atlassian.net")
        monkeypatch.setenv("ATLASSIAN_EMAIL", "env@acme.io")
        monkeypatch.setenv("ATLASSIAN_API_TOKEN", "env-token")
        runner = CliRunner()
        result = runner.invoke(main, ["config", "--json"])

        assert result.exit_code == 0
        assert "env.atlassian.net" in result.output

    def test_missing_environment(self, monkeypatch, tmp_path: Path) -> None:
        monkeypatch.chdir(tmp_path)
        for var in ("ATLASSIAN_DOMAIN", "ATLASSIAN_EMAIL", "ATLASSIAN_API_TOKEN"):
            monkeypatch.delenv(var, raising=False)
        runner = CliRunner()
        result = runner.invoke(main, ["config"])

        assert result.exit_code == 1
        assert "ATLASSIAN_DOMAIN environment variable not set" in result.output
