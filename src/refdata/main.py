"""
ASGI entrypoint.

    uvicorn refdata.main:app --host 0.0.0.0 --port 3000
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from refdata.api.v1 import api_router, register_exception_handlers
from refdata.config import Settings, get_settings
from refdata.core.logging import RequestIDMiddleware, setup_logging
from refdata.database.session import dispose_engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    setup_logging(settings)
    logger.info("app.startup", extra={"env": settings.ENV, "service": settings.APP_NAME})
    try:
        yield
    finally:
        # Return pooled connections before the process exits
        await dispose_engine()
        logger.info("app.shutdown")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(RequestIDMiddleware)
    register_exception_handlers(app)
    app.include_router(api_router)

    @app.get("/health", tags=["health"])
    async def health() -> dict:
        return {"status": "ok"}

    return app


app = create_app()
