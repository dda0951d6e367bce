"""List the tools the gateway advertises."""

from __future__ import annotations

import click

from atlassian_mcp.cli_commands._output import (
    config_option_help,
    load_settings,
    print_tools_json,
    print_tools_table,
)


@click.command()
@click.option("--config", "config_path", type=click.Path(exists=True), help=config_option_help)
@click.option("--json", "as_json", is_flag=True, help="Print the tools/list payload as JSON.")
def tools(config_path: str | None, as_json: bool) -> None:
    """Show tool descriptors computed from the current settings."""
    from atlassian_mcp.tools.registry import create_default_registry

    settings = load_settings(config_path)
    descriptors = create_default_registry().list_tools(settings)

    if as_json:
        print_tools_json(descriptors)
    else:
        print_tools_table(descriptors)
