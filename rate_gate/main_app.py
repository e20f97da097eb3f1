from typing import Optional

from aiohttp import web
from loguru import logger

from rate_gate.config.settings import AppSettings
from rate_gate.di import Container, build_graph
from rate_gate.infrastructure.timestamp_log import TimestampLog
from rate_gate.loader.web import create_web_app


def create_app(
    settings: Optional[AppSettings] = None,
    *,
    log: Optional[TimestampLog] = None,
) -> web.Application:
    container = Container.build(settings)
    limiter = build_graph(container, log=log)
    app = create_web_app(limiter)

    timestamp_log = container.get("timestamp_log")

    async def on_cleanup(app: web.Application) -> None:
        # only the Redis backend holds a connection
        close = getattr(timestamp_log, "close", None)
        if close is not None:
            close()
            logger.info("Timestamp log closed")

    app.on_cleanup.append(on_cleanup)
    return app
