import logging
import sys
from typing import Optional

from loguru import logger

from rate_gate.config.settings import get_settings

_TEXT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

# stdlib loggers routed through loguru
_BRIDGED = ("aiohttp", "asyncio", "redis")


class InterceptHandler(logging.Handler):
    """Forward stdlib records (aiohttp, redis) to loguru at the caller's frame."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(level: Optional[str] = None, *, json_logs: Optional[bool] = None) -> None:
    """
    One stdout sink for the whole process.
    Arguments override LOG_LEVEL / LOG_JSON from settings.
    """
    if level is None or json_logs is None:
        settings = get_settings()
        level = level or settings.log_level
        json_logs = settings.log_json if json_logs is None else json_logs

    logging.root.handlers = [InterceptHandler()]
    logging.root.setLevel(level)
    for name in _BRIDGED:
        logging.getLogger(name).setLevel(level)

    logger.remove()
    if json_logs:
        logger.add(sys.stdout, level=level, serialize=True, backtrace=False, diagnose=False)
    else:
        logger.add(sys.stdout, level=level, format=_TEXT_FORMAT, backtrace=True, diagnose=False)

    logger.info("Logging configured (level: {}, json: {})", level, json_logs)
