from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from rate_gate.application.rate_limiter import RateLimiter
from rate_gate.domain.models import RateLimitConfig
from rate_gate.infrastructure.timestamp_log import InMemoryTimestampLog


def at(hour: int, minute: int, second: int, microsecond: int = 0) -> datetime:
    return datetime(2026, 1, 1, hour, minute, second, microsecond, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)

    def set(self, now: datetime) -> None:
        self.now = now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(at(12, 0, 10))


@pytest.fixture
def config() -> RateLimitConfig:
    return RateLimitConfig.from_mapping({"Message": 5, "Login": 2})


@pytest.fixture
def log() -> InMemoryTimestampLog:
    return InMemoryTimestampLog()


@pytest.fixture
def limiter(config: RateLimitConfig, log: InMemoryTimestampLog, clock: FakeClock) -> RateLimiter:
    return RateLimiter(config, log, clock=clock)


class FakeRedis:
    """Just the list commands the log uses, returning bytes like a raw client."""

    def __init__(self) -> None:
        self.lists: dict[str, list[bytes]] = {}
        self.calls: list[tuple] = []

    def lrange(self, key, start, end):
        self.calls.append(("lrange", key, start, end))
        return list(self.lists.get(key, []))

    def rpush(self, key, value):
        self.calls.append(("rpush", key, value))
        self.lists.setdefault(key, []).append(value.encode("utf-8"))
        return len(self.lists[key])

    def lpop(self, key):
        self.calls.append(("lpop", key))
        values = self.lists.get(key)
        if not values:
            return None
        value = values.pop(0)
        if not values:
            del self.lists[key]
        return value

    def delete(self, key):
        self.calls.append(("delete", key))
        return 1 if self.lists.pop(key, None) is not None else 0


class DecodingRedis(FakeRedis):
    """Decodes replies inside the call, as redis-py does with decode_responses=True."""

    def lrange(self, key, start, end):
        return [v.decode("utf-8") for v in super().lrange(key, start, end)]

    def lpop(self, key):
        value = super().lpop(key)
        return value.decode("utf-8") if value is not None else None


