import asyncio
from typing import Awaitable, Callable

from aiohttp import web
from loguru import logger

from rate_gate.constants import MSG_DROPPED
from rate_gate.di import RateLimiterPort
from rate_gate.domain.errors import (
    ConfigurationError,
    DataCorruptionError,
    RateGateError,
    StoreError,
)

LIMITER_KEY = web.AppKey("rate_limiter", RateLimiterPort)

_STATUS_BY_ERROR: list[tuple[type[RateGateError], int]] = [
    (ConfigurationError, 404),
    (StoreError, 503),
    (DataCorruptionError, 500),
]

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


@web.middleware
async def error_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    try:
        return await handler(request)
    except RateGateError as exc:
        status = next((code for kind, code in _STATUS_BY_ERROR if isinstance(exc, kind)), 500)
        if status >= 500:
            logger.exception("Error while handling {} {}: {}", request.method, request.path, exc)
        else:
            logger.warning("Rejected {} {}: {}", request.method, request.path, exc)
        return web.json_response(exc.to_dict(), status=status)


async def check_request(request: web.Request) -> web.Response:
    limiter = request.app[LIMITER_KEY]
    category = request.match_info["category"]
    client_id = request.match_info["client_id"]

    # storage calls are blocking
    estimate = await asyncio.to_thread(limiter.evaluate, category, client_id)

    body = estimate.to_dict()
    if estimate.admitted:
        return web.json_response(body)
    body["message"] = MSG_DROPPED
    return web.json_response(body, status=429)


async def reset_requests(request: web.Request) -> web.Response:
    limiter = request.app[LIMITER_KEY]
    await asyncio.to_thread(
        limiter.reset, request.match_info["category"], request.match_info["client_id"]
    )
    return web.Response(status=204)


async def list_categories(request: web.Request) -> web.Response:
    limiter = request.app[LIMITER_KEY]
    return web.json_response({"categories": limiter.config.as_dict()})


async def health(request: web.Request) -> web.Response:
    return web.Response(text="ok")


def create_web_app(limiter: RateLimiterPort) -> web.Application:
    app = web.Application(middlewares=[error_middleware])
    app[LIMITER_KEY] = limiter

    app.router.add_post("/v1/requests/{category}/{client_id}", check_request)
    app.router.add_delete("/v1/requests/{category}/{client_id}", reset_requests)
    app.router.add_get("/v1/categories", list_categories)
    app.router.add_get("/health", health)

    return app
