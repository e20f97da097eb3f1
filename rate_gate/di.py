from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol

from loguru import logger

from .application.rate_limiter import Clock, RateLimiter, utc_now
from .config.quotas import load_quotas
from .config.settings import AppSettings, get_settings
from .domain.models import ClientId, Decision, RateLimitConfig, WindowEstimate
from .infrastructure.redis_log import RedisTimestampLog
from .infrastructure.timestamp_log import InMemoryTimestampLog, TimestampLog
from .loader.redis import init_redis


class DIError(RuntimeError):
    pass


# Ports for presentation (so presentation DOES NOT import infrastructure)
class RateLimiterPort(Protocol):
    @property
    def config(self) -> RateLimitConfig: ...
    def recv_request(self, category: str, client_id: ClientId) -> Decision: ...
    def evaluate(self, category: str, client_id: ClientId) -> WindowEstimate: ...
    def reset(self, category: str, client_id: ClientId) -> None: ...


@dataclass(slots=True)
class Container:
    settings: AppSettings
    _components: dict[str, Any]

    @classmethod
    def build(cls, settings: Optional[AppSettings] = None) -> "Container":
        return cls(settings=settings or get_settings(), _components={})

    def register(self, name: str, component: Any) -> None:
        if not name or not name.strip():
            raise DIError("Component name must be non-empty")
        if name in self._components:
            raise DIError(f"Component already registered: {name}")
        self._components[name] = component

    def get(self, name: str) -> Any:
        try:
            return self._components[name]
        except KeyError as exc:
            raise DIError(f"Unknown component: {name}") from exc

    def all_components(self) -> list[tuple[str, Any]]:
        return list(self._components.items())


def build_timestamp_log(settings: AppSettings) -> TimestampLog:
    if not settings.redis_dsn:
        logger.warning("REDIS_DSN is not set, request logs are kept in memory")
        return InMemoryTimestampLog()
    redis = init_redis(settings.redis_dsn)
    return RedisTimestampLog(redis, prefix=settings.redis_key_prefix)


def build_graph(
    container: Container,
    *,
    config: Optional[RateLimitConfig] = None,
    log: Optional[TimestampLog] = None,
    clock: Clock = utc_now,
) -> RateLimiterPort:
    """
    Build the whole dependency graph.
    Any init error must crash at startup.
    """

    s = container.settings

    config = config if config is not None else load_quotas(s.quotas_path)
    log = log if log is not None else build_timestamp_log(s)
    rate_limiter: RateLimiterPort = RateLimiter(config, log, clock=clock)

    container.register("rate_limit_config", config)
    container.register("timestamp_log", log)
    container.register("rate_limiter", rate_limiter)
    return rate_limiter
