from __future__ import annotations

from .application.rate_limiter import RateLimiter
from .domain import (
    ConfigurationError,
    DataCorruptionError,
    Decision,
    LogKey,
    RateGateError,
    RateLimitConfig,
    StoreError,
    WindowEstimate,
)
from .infrastructure import InMemoryTimestampLog, RedisTimestampLog, TimestampLog

__all__ = [
    "RateLimiter",
    "RateLimitConfig",
    "Decision",
    "LogKey",
    "WindowEstimate",
    "TimestampLog",
    "InMemoryTimestampLog",
    "RedisTimestampLog",
    "RateGateError",
    "ConfigurationError",
    "StoreError",
    "DataCorruptionError",
]
