from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError

from kakeibo.api.middleware.error_handler import (
    handle_generic_error,
    handle_integrity_error,
    handle_kakeibo_error,
    handle_validation_error,
)
from kakeibo.api.middleware.logging import RequestLoggingMiddleware, configure_logging
from kakeibo.api.v1 import router as v1_router
from kakeibo.api.v1.health import router as health_router
from kakeibo.config import settings
from kakeibo.core.exceptions import KakeiboError
from kakeibo.db.session import async_engine


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    yield
    # Shutdown
    await async_engine.dispose()


def create_app() -> FastAPI:
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Kakeibo API",
        description="Household card statement budgeting",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    # Add request logging middleware
    app.add_middleware(RequestLoggingMiddleware)

    # Register exception handlers (order matters - most specific first)
    app.add_exception_handler(KakeiboError, handle_kakeibo_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(IntegrityError, handle_integrity_error)
    app.add_exception_handler(Exception, handle_generic_error)

    # Register routers
    app.include_router(health_router)
    app.include_router(v1_router)

    return app


app = create_app()
