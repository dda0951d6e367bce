"""GatewayServer — wires settings, tools and the protocol router together."""

from __future__ import annotations

import asyncio
import logging
import signal
import sys
from typing import TYPE_CHECKING, TextIO

from atlassian_mcp import __version__
from atlassian_mcp.mcp.models import ServerInfo
from atlassian_mcp.mcp.router import ProtocolRouter
from atlassian_mcp.mcp.session import SessionState
from atlassian_mcp.mcp.transport import LineReader, StdioServerTransport, open_stdio_reader
from atlassian_mcp.tools.dispatcher import ToolDispatcher
from atlassian_mcp.tools.optimizer import ResponseOptimizer
from atlassian_mcp.tools.registry import create_default_registry

if TYPE_CHECKING:
    from atlassian_mcp.settings.models import GatewaySettings
    from atlassian_mcp.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)

SERVER_NAME = "mcp-atlassian"


class GatewayServer:
    """One gateway session: a registry, a dispatcher and a router.

    Usage::

        server = GatewayServer(settings)
        await server.serve(reader, sys.stdout)
    """

    def __init__(self, settings: GatewaySettings, registry: ToolRegistry | None = None) -> None:
        self.settings = settings
        self.registry = registry if registry is not None else create_default_registry()
        self.optimizer = ResponseOptimizer.from_settings(settings)
        self.dispatcher = ToolDispatcher(self.registry, settings, self.optimizer)
        self.session = SessionState()
        self.router = ProtocolRouter(
            self.dispatcher,
            self.session,
            ServerInfo(name=SERVER_NAME, version=__version__),
        )

    async def serve(
        self,
        reader: LineReader,
        writer: TextIO,
        *,
        max_empty_reads: int = 3,
        eof_retry_delay: float = 0.1,
    ) -> None:
        transport = StdioServerTransport(
            reader,
            writer,
            max_empty_reads=max_empty_reads,
            eof_retry_delay=eof_retry_delay,
        )
        logger.info(
            "Starting MCP server for %s with %d tools",
            self.settings.atlassian_domain,
            len(self.registry),
        )
        await transport.run(self.router)


async def run_stdio_server(settings: GatewaySettings) -> None:
    """Serve on stdin/stdout until EOF or SIGINT/SIGTERM, whichever comes first.

    In-flight requests are not drained on a signal.
    """
    server = GatewayServer(settings)
    reader = await open_stdio_reader()
    serve_task = asyncio.create_task(server.serve(reader, sys.stdout))

    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    installed: list[signal.Signals] = []
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop.set)
            installed.append(sig)
        except (NotImplementedError, RuntimeError):
            logger.debug("Signal handler for %s not supported here", sig.name)

    stop_task = asyncio.create_task(stop.wait())
    try:
        done, _ = await asyncio.wait(
            {serve_task, stop_task}, return_when=asyncio.FIRST_COMPLETED
        )
        if serve_task in done:
            logger.info("MCP server shutting down: input closed")
            serve_task.result()
        else:
            logger.info("MCP server shutting down: received signal")
    finally:
        for task in (serve_task, stop_task):
            task.cancel()
        for sig in installed:
            loop.remove_signal_handler(sig)
