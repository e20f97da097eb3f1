from __future__ import annotations

from .redis_log import RedisTimestampLog
from .timestamp_log import InMemoryTimestampLog, TimestampLog

__all__ = [
    "InMemoryTimestampLog",
    "RedisTimestampLog",
    "TimestampLog",
]
