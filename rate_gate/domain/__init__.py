from __future__ import annotations

from .errors import ConfigurationError, DataCorruptionError, RateGateError, StoreError
from .models import (
    ClientId,
    Decision,
    LogKey,
    RateLimitConfig,
    RequestCategory,
    WindowEstimate,
)

__all__ = [
    "ClientId",
    "Decision",
    "LogKey",
    "RateLimitConfig",
    "RequestCategory",
    "WindowEstimate",
    "RateGateError",
    "ConfigurationError",
    "StoreError",
    "DataCorruptionError",
]
