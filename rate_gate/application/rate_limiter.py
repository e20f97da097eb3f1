from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

from loguru import logger

from rate_gate.domain import window
from rate_gate.domain.models import (
    ClientId,
    Decision,
    LogKey,
    RateLimitConfig,
    WindowEstimate,
)
from rate_gate.infrastructure.timestamp_log import TimestampLog


Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RateLimiter:
    """
    Weighted sliding-window limiter over a per-client timestamp log.

    For each request the client's log is pruned of entries older than the
    trailing 60 seconds, the rest is split into the current wall-clock minute
    and the previous window, and

        estimate = current + previous * (1 - seconds_into_minute / 60)

    is compared to the category quota. Only admitted requests are logged.

    Read, prune, decide and append are separate log calls with no lock around
    them: concurrent requests for the same key may both be admitted.
    """

    def __init__(self, config: RateLimitConfig, log: TimestampLog, *, clock: Clock = utc_now) -> None:
        self._config = config
        self._log = log
        self._clock = clock

    @property
    def config(self) -> RateLimitConfig:
        return self._config

    def recv_request(self, category: str, client_id: ClientId) -> Decision:
        return self.evaluate(category, client_id).decision

    def evaluate(self, category: str, client_id: ClientId) -> WindowEstimate:
        key = LogKey.for_request(category, client_id)
        quota = self._config.quota(key.category)
        now = window.as_utc(self._clock())

        self._prune(str(key), now)
        entries = window.parse_entries(self._log.read(str(key)))

        current, previous = window.partition(entries, now)
        fraction = window.elapsed_fraction(now)
        estimate = window.weighted_estimate(current, previous, fraction)
        decision = window.decide(estimate, quota)

        if decision is Decision.ADMIT:
            self._log.append(str(key), window.format_timestamp(now))
            logger.debug(
                "admit {} (current={}, previous={}, estimate={:.3f}, quota={})",
                key, current, previous, estimate, quota,
            )
        else:
            logger.info(
                "drop {} (current={}, previous={}, estimate={:.3f}, quota={})",
                key, current, previous, estimate, quota,
            )

        return WindowEstimate(
            key=key,
            quota=quota,
            current=current,
            previous=previous,
            elapsed_fraction=fraction,
            estimate=estimate,
            decision=decision,
        )

    def reset(self, category: str, client_id: ClientId) -> None:
        """Drop the whole history of one client. Administrative, not part of admission."""
        key = LogKey.for_request(category, client_id)
        self._config.quota(key.category)
        self._log.clear(str(key))
        logger.info("cleared request log {}", key)

    def _prune(self, key: str, now: datetime) -> int:
        entries = window.parse_entries(self._log.read(key))
        expired = window.count_expired(entries, now)
        for _ in range(expired):
            self._log.pop_oldest(key)
        if expired:
            logger.debug("pruned {} expired entries from {}", expired, key)
        return expired
