"""Tests for StdioServerTransport — line framing, EOF handling and error envelopes."""

from __future__ import annotations

import asyncio
import io
import json
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from atlassian_mcp.mcp.models import JsonRpcResponse
from atlassian_mcp.mcp.router import ProtocolRouter
from atlassian_mcp.mcp.session import SessionState
from atlassian_mcp.mcp.transport import StdioServerTransport
from atlassian_mcp.settings.models import GatewaySettings
from atlassian_mcp.tools.dispatcher import ToolDispatcher
from atlassian_mcp.tools.registry import ToolRegistry


def _reader(*lines: str, limit: int = 2**16) -> asyncio.StreamReader:
    reader = asyncio.StreamReader(limit=limit)
    for line in lines:
        reader.feed_data(line.encode("utf-8"))
    reader.feed_eof()
    return reader


def _responses(writer: io.StringIO) -> list[dict[str, Any]]:
    return [json.loads(line) for line in writer.getvalue().splitlines()]


@pytest.fixture
def router(settings: GatewaySettings) -> ProtocolRouter:
    return ProtocolRouter(ToolDispatcher(ToolRegistry(), settings), SessionState())


async def _run(reader: Any, router: Any, writer: io.StringIO) -> None:
    transport = StdioServerTransport(reader, writer, eof_retry_delay=0)
    await asyncio.wait_for(transport.run(router), timeout=5)


class TestFraming:
    async def test_one_response_per_request(self, router: ProtocolRouter) -> None:
        writer = io.StringIO()
        await _run(
            _reader(
                '{"jsonrpc":"2.0","id":1,"method":"initialize"}\n',
                '{"jsonrpc":"2.0","id":2,"method":"nope"}\n',
            ),
            router,
            writer,
        )
        responses = _responses(writer)
        assert [response["id"] for response in responses] == [1, 2]
        assert "result" in responses[0]
        assert responses[1]["error"]["code"] == -32601

    async def test_blank_lines_skipped(self, router: ProtocolRouter) -> None:
        writer = io.StringIO()
        await _run(
            _reader("\n", "   \n", '{"jsonrpc":"2.0","id":1,"method":"initialize"}\n'),
            router,
            writer,
        )
        assert len(_responses(writer)) == 1

    async def test_notification_writes_nothing(self, router: ProtocolRouter) -> None:
        writer = io.StringIO()
        await _run(_reader('{"jsonrpc":"2.0","method":"initialized"}\n'), router, writer)
        assert writer.getvalue() == ""
        assert router.session.initialized

    async def test_last_line_without_newline(self, router: ProtocolRouter) -> None:
        writer = io.StringIO()
        await _run(_reader('{"jsonrpc":"2.0","id":9,"method":"initialize"}'), router, writer)
        assert _responses(writer)[0]["id"] == 9

    async def test_parse_error_keeps_serving(self, router: ProtocolRouter) -> None:
        writer = io.StringIO()
        await _run(
            _reader("garbage\n", '{"jsonrpc":"2.0","id":1,"method":"initialize"}\n'),
            router,
            writer,
        )
        responses = _responses(writer)
        assert responses[0] == {
            "jsonrpc": "2.0",
            "error": {"code": -32700, "message": "Parse error"},
            "id": None,
        }
        assert responses[1]["id"] == 1

    async def test_output_is_single_line_json(self, router: ProtocolRouter) -> None:
        writer = io.StringIO()
        await _run(_reader('{"jsonrpc":"2.0","id":1,"method":"initialize"}\n'), router, writer)
        output = writer.getvalue()
        assert output.endswith("\n")
        assert output.count("\n") == 1


class TestFailures:
    async def test_router_exception_becomes_internal_error(self) -> None:
        router = MagicMock()
        router.handle_line = AsyncMock(side_effect=RuntimeError("kaput"))
        writer = io.StringIO()
        await _run(_reader('{"jsonrpc":"2.0","id":1,"method":"initialize"}\n'), router, writer)
        assert _responses(writer) == [
            {"jsonrpc": "2.0", "error": {"code": -32603, "message": "kaput"}, "id": None}
        ]

    async def test_read_error_ends_loop(self, router: ProtocolRouter) -> None:
        reader = MagicMock()
        reader.readline = AsyncMock(side_effect=OSError("broken pipe"))
        writer = io.StringIO()
        await _run(reader, router, writer)
        reader.readline.assert_awaited_once()
        assert writer.getvalue() == ""

    async def test_oversized_line_ends_loop(self, router: ProtocolRouter) -> None:
        writer = io.StringIO()
        await _run(_reader("x" * 64 + "\n", limit=16), router, writer)
        assert writer.getvalue() == ""

    async def test_eof_retries_before_stopping(self, router: ProtocolRouter) -> None:
        reader = MagicMock()
        reader.readline = AsyncMock(return_value=b"")
        transport = StdioServerTransport(
            reader, io.StringIO(), max_empty_reads=3, eof_retry_delay=0
        )
        await transport.run(router)
        assert reader.readline.await_count == 4

    async def test_data_resets_eof_counter(self, router: ProtocolRouter) -> None:
        reader = MagicMock()
        reader.readline = AsyncMock(
            side_effect=[b"", b"", b"\n", b"", b"", b"", b""]
        )
        transport = StdioServerTransport(
            reader, io.StringIO(), max_empty_reads=2, eof_retry_delay=0
        )
        await transport.run(router)
        assert reader.readline.await_count == 6


class TestSend:
    def test_unserializable_result_falls_back(self) -> None:
        writer = io.StringIO()
        transport = StdioServerTransport(MagicMock(), writer)
        transport.send(JsonRpcResponse.success(5, {"value": object()}))
        wire = json.loads(writer.getvalue())
        assert wire["id"] == 5
        assert wire["error"]["code"] == -32603
        assert wire["error"]["message"].startswith("Failed to serialize response")
