from __future__ import annotations

import threading
from collections import deque
from typing import Deque, Dict, Protocol, runtime_checkable


@runtime_checkable
class TimestampLog(Protocol):
    """
    Ordered per-key list of stored timestamps, oldest first.
    Only per-call correctness is required; callers do not get cross-call isolation.
    """

    def read(self, key: str) -> list[str]: ...
    def append(self, key: str, timestamp: str) -> None: ...
    def pop_oldest(self, key: str) -> None: ...
    def clear(self, key: str) -> None: ...


class InMemoryTimestampLog:
    """Process-local log. Each call holds the lock, so a single call is atomic."""

    def __init__(self) -> None:
        self._logs: Dict[str, Deque[str]] = {}
        self._lock = threading.Lock()

    def read(self, key: str) -> list[str]:
        with self._lock:
            return list(self._logs.get(key, ()))

    def append(self, key: str, timestamp: str) -> None:
        with self._lock:
            self._logs.setdefault(key, deque()).append(timestamp)

    def pop_oldest(self, key: str) -> None:
        with self._lock:
            q = self._logs.get(key)
            if not q:
                return
            q.popleft()
            if not q:
                del self._logs[key]

    def clear(self, key: str) -> None:
        with self._lock:
            self._logs.pop(key, None)

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._logs)
