"""The write-once "initialized" flag shared by the router."""

from __future__ import annotations

import threading


class SessionState:
    """Tracks whether the client finished the MCP handshake.

    Starts uninitialized, flips once on the ``initialized`` notification and
    never resets. Writers take a lock; readers only read a bool, so
    concurrent dispatch tasks can check it freely.
    """

    def __init__(self) -> None:
        self._initialized = False
        self._lock = threading.Lock()

    @property
    def initialized(self) -> bool:
        return self._initialized

    def mark_initialized(self) -> bool:
        """Set the flag; return ``True`` if this call performed the transition."""
        with self._lock:
            if self._initialized:
                return False
            self._initialized = True
            return True
