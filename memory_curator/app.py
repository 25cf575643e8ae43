"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from memory_curator.api.routers import api_router
from memory_curator.config.settings import Settings, get_settings
from memory_curator.errors import ConfigurationError
from memory_curator.infrastructure.llm.factory import close_shared_client
from memory_curator.infrastructure.logging.logger import setup_logging

settings = get_settings()

setup_logging(
    level=settings.log_level,
    json_output=not settings.debug,
    silence_noisy_loggers=True,
)

logger = logging.getLogger(__name__)


def _validate_startup_config(settings: Settings) -> None:
    """Warn about missing credentials; the endpoints that need them return 503."""
    try:
        settings.require_credentials()
    except ConfigurationError as e:
        logger.warning("%s (cleanup and classify endpoints are disabled)", e)

    if len(settings.classifier_models) < 2:
        logger.warning(
            "Only %d classifier model(s) configured; consensus needs at least 2 "
            "successful classifiers and will always be 'uncertain'",
            len(settings.classifier_models),
        )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup and shutdown lifecycle."""
    logger.info("Starting %s", settings.app_name)
    _validate_startup_config(settings)
    yield
    logger.info("Shutting down %s", settings.app_name)
    try:
        await close_shared_client()
        logger.info("Shared OpenAI client closed")
    except Exception as e:
        logger.error("Error closing shared OpenAI client: %s", e, exc_info=True)


app = FastAPI(
    title="Memory Curator",
    description="Retires transient memories using multi-model consensus classification",
    version=settings.app_version,
    lifespan=lifespan,
)

app.include_router(api_router, prefix="/api")
