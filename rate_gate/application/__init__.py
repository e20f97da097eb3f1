from __future__ import annotations

from .rate_limiter import Clock, RateLimiter, utc_now

__all__ = [
    "Clock",
    "RateLimiter",
    "utc_now",
]
