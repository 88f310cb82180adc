"""
Application factory.

Run with:
    uvicorn trees_api.main:app --reload
"""
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI

from trees_api.config import Settings, get_settings
from trees_api.core.logging import setup_logging, RequestIDMiddleware
from trees_api.api.v1.trees import router as trees_router
from trees_api.api.v1.error_handlers import register_exception_handlers
from trees_api.database.session import engine

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings)
        logger.info("Starting trees-api", extra={"env": settings.ENV})
        yield
        await engine.dispose()
        logger.info("Stopped trees-api")

    app = FastAPI(title="Trees API", lifespan=lifespan)

    app.add_middleware(RequestIDMiddleware)
    app.include_router(trees_router)
    register_exception_handlers(app)

    return app


app = create_app()
