"""Tests for SessionState."""

from __future__ import annotations

import threading

from atlassian_mcp.mcp.session import SessionState


class TestSessionState:
    def test_starts_uninitialized(self) -> None:
        assert SessionState().initialized is False

    def test_mark_initialized(self) -> None:
        session = SessionState()
        assert session.mark_initialized() is True
        assert session.initialized is True

    def test_idempotent(self) -> None:
        session = SessionState()
        session.mark_initialized()
        assert session.mark_initialized() is False
        assert session.initialized is True

    def test_single_transition_under_contention(self) -> None:
        session = SessionState()
        transitions: list[bool] = []
        lock = threading.Lock()

        def worker() -> None:
            changed = session.mark_initialized()
            with lock:
                transitions.append(changed)

        threads = [threading.Thread(target=worker) for _ in range(16)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert transitions.count(True) == 1
        assert session.initialized is True
