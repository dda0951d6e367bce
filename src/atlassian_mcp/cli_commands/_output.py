"""Shared CLI output helpers."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.table import Table

from atlassian_mcp.settings import ConfigurationError, SettingsLoader
from atlassian_mcp.tools.dispatcher import is_read_only

if TYPE_CHECKING:
    from atlassian_mcp.mcp.models import ToolDescriptor
    from atlassian_mcp.settings.models import GatewaySettings

console = Console()
err_console = Console(stderr=True)

config_option_help = "YAML settings file. Defaults to environment variables (and .env)."


def load_settings(config_path: str | None) -> GatewaySettings:
    """Load settings or exit with status 1 and the error on stderr."""
    loader = SettingsLoader(Path(config_path) if config_path else None)
    try:
        return loader.load()
    except ConfigurationError as exc:
        err_console.print(f"[red]Configuration error:[/red] {exc}")
        sys.exit(1)


def print_tools_table(tools: list[ToolDescriptor]) -> None:
    """Pretty-print tool descriptors as a table."""
    table = Table(title="Tools", caption=f"{len(tools)} tools")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Access")
    table.add_column("Required")
    table.add_column("Description")

    for tool in tools:
        table.add_row(
            tool.name,
            "read" if is_read_only(tool.name) else "write",
            ", ".join(tool.input_schema.required) or "-",
            _truncate(tool.description),
        )

    console.print(table)


def print_tools_json(tools: list[ToolDescriptor]) -> None:
    console.print_json(json.dumps([tool.to_wire() for tool in tools], ensure_ascii=False))


def print_settings(settings: GatewaySettings, *, as_json: bool = False) -> None:
    """Print settings with the API token masked."""
    data = settings.redacted()
    if as_json:
        console.print_json(json.dumps(data, default=str))
        return

    table = Table(title="Gateway Settings")
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value")
    for key, value in data.items():
        table.add_row(key, _format_value(value))
    console.print(table)


def _format_value(value: Any) -> str:
    if value is None:
        return "(default)"
    if isinstance(value, list):
        return ", ".join(str(v) for v in value) or "-"
    return str(value)


def _truncate(text: str, max_len: int = 60) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
