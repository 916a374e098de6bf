"""
Logging setup for the API process.

Uses the standard library `logging` configured once via dictConfig, plus a
small middleware that logs every request with its status and duration.
"""

from __future__ import annotations

import logging
import time
from logging.config import dictConfig

from fastapi import Request

from . import settings

logger = logging.getLogger("api.requests")


def setup_logging(level: str | None = None) -> None:
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                },
            },
            "root": {
                "handlers": ["console"],
                "level": level or settings.log_level(),
            },
        }
    )


async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(
        "%s %s -> %s (%.1fms)",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
    )
    return response
