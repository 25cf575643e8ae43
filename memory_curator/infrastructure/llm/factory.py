"""LLM client factory helpers."""

import logging

from openai import AsyncOpenAI

from memory_curator.config.settings import Settings
from memory_curator.errors import ConfigurationError

logger = logging.getLogger(__name__)

_shared_client: AsyncOpenAI | None = None


def create_openai_client(settings: Settings) -> AsyncOpenAI:
    """
    Create an OpenAI-compatible async client for the inference endpoint.

    The endpoint is OpenRouter by default, which expects the
    ``HTTP-Referer`` and ``X-Title`` headers to attribute traffic.

    Args:
        settings: Application settings

    Returns:
        Configured AsyncOpenAI client

    Raises:
        ConfigurationError: If no API key is configured
    """
    api_key = settings.openai_api_key
    if api_key is None or not api_key.get_secret_value():
        raise ConfigurationError("OPENAI_API_KEY is required")

    logger.debug("Creating OpenAI client for %s", settings.openai_base_url)
    return AsyncOpenAI(
        api_key=api_key.get_secret_value(),
        base_url=settings.openai_base_url,
        max_retries=settings.openai_max_retries,
        default_headers={
            "HTTP-Referer": settings.http_referer,
            "X-Title": settings.app_title,
        },
    )


def get_shared_client(settings: Settings) -> AsyncOpenAI:
    """
    Get or create a shared AsyncOpenAI instance.

    All classifiers share one client so its connection pool is reused.
    """
    global _shared_client
    if _shared_client is None:
        _shared_client = create_openai_client(settings)
    return _shared_client


async def close_shared_client() -> None:
    """
    Close the shared client instance.

    Should be called during application shutdown to properly clean up resources.
    """
    global _shared_client
    if _shared_client is not None:
        await _shared_client.close()
        _shared_client = None
