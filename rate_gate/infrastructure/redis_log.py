from __future__ import annotations

from typing import Any

from loguru import logger
from redis import Redis
from redis.exceptions import RedisError

from rate_gate.constants import DEFAULT_REDIS_KEY_PREFIX
from rate_gate.domain.errors import DataCorruptionError, StoreError


class RedisTimestampLog:
    """
    One Redis list per key: RPUSH at the tail, LPOP from the head.
    Redis failures surface as StoreError; nothing is retried here.
    """

    def __init__(self, redis: Redis, *, prefix: str = DEFAULT_REDIS_KEY_PREFIX) -> None:
        self._redis = redis
        self._prefix = prefix

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    def _call(self, op: str, key: str, *args: Any) -> Any:
        try:
            return getattr(self._redis, op)(self._key(key), *args)
        except RedisError as exc:
            logger.error("Redis {} failed for {}: {!r}", op, key, exc)
            raise StoreError(f"Redis {op} failed for {key!r}", data={"op": op, "key": key}) from exc
        except UnicodeDecodeError as exc:
            # clients built with decode_responses=True decode inside the call
            raise DataCorruptionError(
                f"Log entry under {key!r} is not valid UTF-8", data={"key": key}
            ) from exc

    def read(self, key: str) -> list[str]:
        values = self._call("lrange", key, 0, -1)
        return [_decode(key, v) for v in values]

    def append(self, key: str, timestamp: str) -> None:
        self._call("rpush", key, timestamp)

    def pop_oldest(self, key: str) -> None:
        # LPOP on a missing key returns None, which is the no-op we want
        self._call("lpop", key)

    def clear(self, key: str) -> None:
        self._call("delete", key)

    def close(self) -> None:
        try:
            self._redis.close()
        except RedisError as exc:
            logger.warning("Failed to close Redis client: {!r}", exc)


def _decode(key: str, value: str | bytes) -> str:
    if not isinstance(value, bytes):
        return value
    try:
        return value.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DataCorruptionError(
            f"Log entry under {key!r} is not valid UTF-8: {value!r}",
            data={"key": key},
        ) from exc
