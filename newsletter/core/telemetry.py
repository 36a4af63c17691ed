import logging
import uuid
from typing import Optional

import logfire
import sentry_sdk
from fastapi import FastAPI, Request
from sqlalchemy.ext.asyncio import AsyncEngine

from newsletter.core.config import Settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
REQUEST_ID_HEADER = "X-Request-ID"
HEALTH_CHECK_PATH = "/health_check"

_logger: Optional[logging.Logger] = None

logger = logging.getLogger(__name__)


def logfire_enabled(settings: Settings) -> bool:
    return bool(settings.LOGFIRE_TOKEN) and settings.LOGFIRE_TOKEN != "fake-token-for-testing"


def init_telemetry(settings: Settings) -> logging.Logger:
    """
    Process-wide logging, error reporting and tracing setup.

    Call once at startup and pass the returned logger down to the application
    factory. Later calls return the same logger without touching the global
    logging configuration again.
    """
    global _logger
    if _logger is not None:
        return _logger

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(),
        ],
    )

    # Keep driver chatter out of the application log
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)

    if settings.SENTRY_DSN:
        sentry_sdk.init(
            dsn=settings.SENTRY_DSN,
            environment=settings.ENVIRONMENT,
            send_default_pii=False,
        )

    if logfire_enabled(settings):
        try:
            logfire.configure(
                token=settings.LOGFIRE_TOKEN,
                service_name=settings.PROJECT_NAME,
                environment=settings.ENVIRONMENT,
            )
        except Exception as e:
            logger.warning(f"Failed to configure Logfire: {e}")

    _logger = logging.getLogger(settings.PROJECT_NAME)
    _logger.setLevel(settings.LOG_LEVEL)
    return _logger


def instrument_app(app: FastAPI, engine: AsyncEngine, settings: Settings) -> None:
    """Attach logfire request and query spans when logfire is configured."""
    if not logfire_enabled(settings):
        return
    try:
        logfire.instrument_fastapi(app, capture_headers=True, excluded_urls=HEALTH_CHECK_PATH)
        logfire.instrument_sqlalchemy(engine)
    except Exception as e:
        logger.warning(f"Failed to instrument application with Logfire: {e}")


async def add_request_id(request: Request, call_next):
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id
    response = await call_next(request)
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


def get_request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "-")


def get_logger(request: Request) -> logging.Logger:
    """Dependency returning the logger handle the app was built with."""
    return request.app.state.logger
