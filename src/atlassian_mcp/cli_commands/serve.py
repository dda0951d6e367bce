"""``atlassian-mcp serve`` — run the MCP gateway on stdin/stdout."""

from __future__ import annotations

import asyncio
import sys

import click

from atlassian_mcp.cli_commands._output import config_option_help, err_console, load_settings

_LEVELS = ["trace", "debug", "info", "warning", "error"]


@click.command()
@click.option("--config", "config_path", type=click.Path(exists=True), help=config_option_help)
@click.option(
    "--log-level",
    type=click.Choice(_LEVELS, case_sensitive=False),
    default=None,
    help="Override LOG_LEVEL.",
)
@click.option("--json-logs", is_flag=True, help="Emit JSON log lines on stderr.")
@click.option("--otlp-endpoint", default=None, help="Export traces via OTLP/gRPC.")
def serve(
    config_path: str | None,
    log_level: str | None,
    json_logs: bool,
    otlp_endpoint: str | None,
) -> None:
    """Serve MCP over stdio until the client disconnects."""
    from atlassian_mcp.mcp.server import run_stdio_server
    from atlassian_mcp.utils.logging import configure_logging

    settings = load_settings(config_path)
    configure_logging(
        log_level or settings.log_level,
        json_logs=json_logs or settings.json_logs,
    )

    if otlp_endpoint:
        from atlassian_mcp.utils.telemetry import configure_telemetry

        try:
            configure_telemetry(otlp_endpoint=otlp_endpoint)
        except ImportError as exc:
            err_console.print(f"[red]Telemetry error:[/red] {exc}")
            sys.exit(1)

    try:
        asyncio.run(run_stdio_server(settings))
    except KeyboardInterrupt:
        pass
