from loguru import logger
from redis import Redis
from redis.exceptions import RedisError

from rate_gate.domain.errors import StoreError


def init_redis(dsn: str) -> Redis:
    """Connect and ping. A configured but unreachable Redis is fatal at startup."""
    # raw bytes: RedisTimestampLog decodes and reports bad entries itself
    redis = Redis.from_url(dsn, decode_responses=False)
    try:
        redis.ping()
    except RedisError as exc:
        logger.error("Failed to connect to Redis: {!r}", exc)
        redis.close()
        raise StoreError("Redis is not reachable", data={"dsn": _safe_dsn(dsn)}) from exc
    logger.info("Connected to Redis at {}", _safe_dsn(dsn))
    return redis


def _safe_dsn(dsn: str) -> str:
    # hide credentials in logs
    if "@" not in dsn:
        return dsn
    scheme, _, rest = dsn.partition("://")
    return f"{scheme}://***@{rest.rsplit('@', 1)[1]}"
