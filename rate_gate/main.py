import asyncio

import uvloop
from aiohttp import web
from loguru import logger

from rate_gate.config.settings import get_settings
from rate_gate.loader.logging import setup_logging
from rate_gate.main_app import create_app


def main():
    uvloop.install()
    setup_logging()
    settings = get_settings()

    logger.info("Starting rate gate on {}:{}", settings.webapp_host, settings.webapp_port)

    async def _run():
        app = create_app(settings)
        runner = web.AppRunner(app)
        await runner.setup()
        site = web.TCPSite(runner, host=settings.webapp_host, port=settings.webapp_port)
        await site.start()
        logger.info("Rate gate started")
        try:
            # block until cancelled
            while True:
                await asyncio.sleep(3600)
        finally:
            await runner.cleanup()

    asyncio.run(_run())


if __name__ == "__main__":
    main()
