from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Sequence

from ..constants import ESTIMATE_PRECISION, WINDOW_SEC
from .errors import DataCorruptionError
from .models import Decision


WINDOW = timedelta(seconds=WINDOW_SEC)


def as_utc(moment: datetime) -> datetime:
    """Naive datetimes are UTC, aware ones are converted."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    return as_utc(moment).isoformat()


def parse_timestamp(raw: str | bytes) -> datetime:
    """
    Parse one stored log entry.
    Naive values are taken as UTC. Anything unparsable is corruption, never skipped.
    """
    try:
        text = raw.decode("utf-8") if isinstance(raw, bytes) else raw
        moment = datetime.fromisoformat(text)
    except (TypeError, ValueError, UnicodeDecodeError) as exc:
        raise DataCorruptionError(
            f"Log entry is not a parsable timestamp: {raw!r}",
            data={"entry": repr(raw)},
        ) from exc
    return as_utc(moment)


def parse_entries(entries: Sequence[str | bytes]) -> list[datetime]:
    return [parse_timestamp(e) for e in entries]


def count_expired(entries: Sequence[datetime], now: datetime) -> int:
    """Number of leading entries strictly older than the trailing window."""
    cutoff = now - WINDOW
    expired = 0
    for moment in entries:
        if moment < cutoff:
            expired += 1
            continue
        break  # chronological: everything after is inside the window
    return expired


def window_start(now: datetime) -> datetime:
    """Start of the wall-clock minute containing *now*."""
    return now.replace(second=0, microsecond=0)


def partition(entries: Sequence[datetime], now: datetime) -> tuple[int, int]:
    """Split pruned entries into (current minute, previous window) counts."""
    start = window_start(now)
    current = 0
    for moment in reversed(entries):
        if moment > start:
            current += 1
        else:
            break
    return current, len(entries) - current


def elapsed_fraction(now: datetime) -> float:
    return now.second / WINDOW_SEC


def weighted_estimate(current: int, previous: int, fraction: float) -> float:
    """
    current + previous * (1 - fraction).
    Rounded so float noise cannot push an exact tie below the quota.
    """
    return round(current + previous * (1.0 - fraction), ESTIMATE_PRECISION)


def decide(estimate: float, quota: int) -> Decision:
    # strict: an estimate equal to the quota is already full
    if estimate < quota:
        return Decision.ADMIT
    return Decision.DROP
