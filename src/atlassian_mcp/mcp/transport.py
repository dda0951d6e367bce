"""Stdio transport — newline-delimited JSON-RPC in, newline-delimited JSON-RPC out.

The loop handles one line at a time: the next line is read only after the
current response has been written and flushed.
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from typing import TYPE_CHECKING, Protocol, TextIO, runtime_checkable

from atlassian_mcp.mcp.errors import InternalError
from atlassian_mcp.mcp.models import JsonRpcResponse

if TYPE_CHECKING:
    from atlassian_mcp.mcp.router import ProtocolRouter

logger = logging.getLogger(__name__)

# Largest accepted input line; Confluence page bodies can be big.
STREAM_LIMIT = 16 * 1024 * 1024


@runtime_checkable
class LineReader(Protocol):
    """Anything with an ``asyncio.StreamReader``-style ``readline``."""

    async def readline(self) -> bytes: ...


class StdioServerTransport:
    """Drives a :class:`ProtocolRouter` from a line reader to a text writer.

    Usage::

        reader = await open_stdio_reader()
        await StdioServerTransport(reader, sys.stdout).run(router)
    """

    def __init__(
        self,
        reader: LineReader,
        writer: TextIO,
        *,
        max_empty_reads: int = 3,
        eof_retry_delay: float = 0.1,
    ) -> None:
        self._reader = reader
        self._writer = writer
        self._max_empty_reads = max_empty_reads
        self._eof_retry_delay = eof_retry_delay

    async def run(self, router: ProtocolRouter) -> None:
        """Serve until end of input or a read error."""
        empty_reads = 0
        while True:
            try:
                raw = await self._reader.readline()
            except (OSError, ValueError) as exc:
                logger.error("Error reading from stdin: %s", exc)
                break

            if not raw:
                empty_reads += 1
                if empty_reads > self._max_empty_reads:
                    logger.info("Client disconnected (EOF)")
                    break
                await asyncio.sleep(self._eof_retry_delay)
                continue

            empty_reads = 0
            line = raw.decode("utf-8", errors="replace").strip()
            if not line:
                continue

            logger.debug("Received: %.500s", line)
            response = await self._handle(router, line)
            if response is None:
                logger.debug("Notification received, no response sent")
                continue
            self.send(response)

    async def _handle(self, router: ProtocolRouter, line: str) -> JsonRpcResponse | None:
        try:
            return await router.handle_line(line)
        except Exception as exc:
            logger.exception("Error processing request")
            return JsonRpcResponse.failure(None, InternalError(str(exc)).to_error())

    def send(self, response: JsonRpcResponse) -> None:
        """Write *response* as one JSON line and flush."""
        try:
            payload = json.dumps(response.to_wire(), ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            logger.error("Failed to serialize response: %s", exc)
            fallback = JsonRpcResponse.failure(
                response.id, InternalError(f"Failed to serialize response: {exc}").to_error()
            )
            payload = json.dumps(fallback.to_wire())
        logger.debug("Sending response: %.500s", payload)
        self._writer.write(payload + "\n")
        self._writer.flush()


async def open_stdio_reader(stream: TextIO | None = None) -> asyncio.StreamReader:
    """Wrap *stream* (default ``sys.stdin``) in an :class:`asyncio.StreamReader`."""
    stream = stream or sys.stdin
    loop = asyncio.get_running_loop()
    reader = asyncio.StreamReader(limit=STREAM_LIMIT)
    protocol = asyncio.StreamReaderProtocol(reader)
    await loop.connect_read_pipe(lambda: protocol, stream)
    return reader
