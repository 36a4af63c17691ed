import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from sqlalchemy.ext.asyncio import AsyncEngine

from newsletter.api.health import router as health_router
from newsletter.api.subscriptions import router as subscriptions_router
from newsletter.core.config import Settings, get_settings
from newsletter.core.database import build_engine, build_sessionmaker
from newsletter.core.telemetry import add_request_id, get_request_id, instrument_app


def _redacted(url: str) -> str:
    return url.split("@")[-1] if "@" in url else "local"


def create_app(
    settings: Optional[Settings] = None,
    engine: Optional[AsyncEngine] = None,
    logger: Optional[logging.Logger] = None,
) -> FastAPI:
    """
    Build the HTTP application around an existing connection pool.

    The engine and logger are injected so that callers (the entry point,
    tests) own their lifetime; when omitted they are created from settings.
    """
    settings = settings or get_settings()
    logger = logger or logging.getLogger(settings.PROJECT_NAME)
    owns_engine = engine is None
    engine = engine or build_engine(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting up {settings.PROJECT_NAME}...")
        logger.info(f"Environment: {settings.ENVIRONMENT}")
        logger.info(f"Database: {_redacted(str(engine.url))}")

        yield

        logger.info(f"Shutting down {settings.PROJECT_NAME}...")
        if owns_engine:
            await engine.dispose()

    app = FastAPI(
        title="Newsletter API", lifespan=lifespan, docs_url=None, redoc_url=None
    )
    app.state.settings = settings
    app.state.logger = logger
    app.state.engine = engine
    app.state.sessionmaker = build_sessionmaker(engine)

    @app.exception_handler(RequestValidationError)
    async def bad_request_handler(request: Request, exc: RequestValidationError):
        logger.warning(
            f"request_id {get_request_id(request)} - Rejected request to {request.url.path}: "
            f"{len(exc.errors())} validation error(s)"
        )
        return Response(status_code=400)

    app.middleware("http")(add_request_id)
    instrument_app(app, engine, settings)

    app.include_router(health_router)
    app.include_router(subscriptions_router)

    return app
