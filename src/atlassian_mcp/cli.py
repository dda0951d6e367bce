"""atlassian-mcp CLI entrypoint."""

from __future__ import annotations

import click

from atlassian_mcp import __version__


@click.group()
@click.version_option(version=__version__, prog_name="atlassian-mcp")
def main() -> None:
    """Atlassian MCP gateway: Jira and Confluence tools over stdio."""


# Register subcommands
from atlassian_mcp.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
