"""
Main FastAPI application.

This is the entry point for the API server.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.responses import RedirectResponse

from app.core.config import settings
from app.core.logging import setup_logging
from app.db.session import engine
from app.errors import (
    AppError,
    app_error_handler,
    request_validation_error_handler,
    unhandled_error_handler,
)
from app.routers import dashboard, health, subtasks, tasks

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for the FastAPI app.

    Configures logging on startup and releases pooled connections on shutdown.
    """
    setup_logging(settings.LOG_LEVEL)
    logger.info("Starting %s (%s)", settings.APP_NAME, settings.ENVIRONMENT)

    yield

    logger.info("Shutting down %s", settings.APP_NAME)
    await engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    description="Task and subtask workflow API for school administration",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_exception_handler(AppError, app_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_error_handler)
app.add_exception_handler(Exception, unhandled_error_handler)


app.include_router(health.router, tags=["Health"])
app.include_router(tasks.router)
app.include_router(subtasks.router)
app.include_router(dashboard.router)


@app.get("/", include_in_schema=False)
async def root():
    """Root endpoint - redirects to the API docs."""
    return RedirectResponse(url="/docs", status_code=303)
