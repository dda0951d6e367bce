"""The ``atlassian-mcp config`` command."""

from __future__ import annotations

import click

from atlassian_mcp.cli_commands._output import (
    config_option_help,
    console,
    load_settings,
    print_settings,
)


@click.command()
@click.option("--config", "config_path", type=click.Path(exists=True), help=config_option_help)
@click.option("--json", "as_json", is_flag=True, help="Print settings as JSON.")
def config(config_path: str | None, as_json: bool) -> None:
    """Validate settings and print them with the API token redacted."""
    settings = load_settings(config_path)
    print_settings(settings, as_json=as_json)
    if not as_json:
        console.print(f"[green]Settings valid.[/green] Site: {settings.base_url}")
