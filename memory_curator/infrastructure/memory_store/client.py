"""
OpenMemory HTTP client.

Wraps the two endpoints the curator needs (filter and delete) behind
``fetch_page`` / ``delete_memories``. Every transport or schema problem is
surfaced as ``MemoryStoreError``; transient failures are retried first.
"""

import logging
from typing import Any, Protocol

import httpx
from pydantic import BaseModel, ValidationError

from memory_curator.config.constants import SortDirection
from memory_curator.config.settings import Settings
from memory_curator.errors import ConfigurationError, MemoryStoreError
from memory_curator.infrastructure.memory_store.models import (
    DeleteRequest,
    DeleteResponse,
    FilterRequest,
    MemoryPage,
)
from memory_curator.utils.retry import run_with_retry

logger = logging.getLogger(__name__)


class MemoryStore(Protocol):
    """Retrieval and deletion operations the pipeline depends on."""

    async def fetch_page(
        self,
        page: int = 1,
        size: int = 25,
        sort_column: str = "created_at",
        sort_direction: str = "desc",
    ) -> MemoryPage: ...

    async def delete_memories(self, ids: list[str]) -> DeleteResponse: ...


class MemoryStoreClient:
    """Async client for the OpenMemory REST API."""

    def __init__(
        self,
        settings: Settings,
        http_client: httpx.AsyncClient | None = None,
    ):
        """
        Initialize the client.

        Args:
            settings: Application settings (base URL, bearer token, retries)
            http_client: Optional pre-built client, mainly for tests
        """
        token = settings.openmemory_bearer_token
        if token is None or not token.get_secret_value():
            raise ConfigurationError("OPENMEMORY_BEARER_TOKEN is required")

        self.settings = settings
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=settings.openmemory_timeout)
        self._headers = {
            "Authorization": f"Bearer {token.get_secret_value()}",
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

    async def __aenter__(self) -> "MemoryStoreClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP session if this client created it."""
        if self._owns_client:
            await self._client.aclose()

    async def fetch_page(
        self,
        page: int = 1,
        size: int = 25,
        sort_column: str = "created_at",
        sort_direction: str = "desc",
    ) -> MemoryPage:
        """Fetch one page of memories."""
        body = FilterRequest(
            page=page,
            size=size,
            sort_column=sort_column,
            sort_direction=SortDirection(sort_direction),
        )
        data = await self._send("POST", "/memories/filter", body)
        return self._validate(MemoryPage, data, "filter")

    async def delete_memories(self, ids: list[str]) -> DeleteResponse:
        """Delete the given memories."""
        body = DeleteRequest(memory_ids=list(ids))
        data = await self._send("DELETE", "/memories/", body)
        return self._validate(DeleteResponse, data, "delete")

    async def _send(self, method: str, path: str, body: BaseModel) -> Any:
        url = f"{self.settings.openmemory_base_url}{path}"

        async def _request() -> httpx.Response:
            response = await self._client.request(
                method,
                url,
                json=body.model_dump(mode="json"),
                headers=self._headers,
            )
            response.raise_for_status()
            return response

        try:
            response = await run_with_retry(
                _request,
                max_retries=self.settings.openmemory_max_retries,
                initial_delay=self.settings.openmemory_retry_delay,
            )
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise MemoryStoreError(
                f"{method} {path} failed with HTTP {status}: {e.response.text[:500]}",
                status_code=status,
            ) from e
        except httpx.HTTPError as e:
            raise MemoryStoreError(f"{method} {path} failed: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise MemoryStoreError(f"{method} {path} returned invalid JSON") from e

    @staticmethod
    def _validate(model: type[BaseModel], data: Any, operation: str) -> Any:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.debug("Unexpected %s response: %s", operation, data)
            raise MemoryStoreError(
                f"{operation} response did not match the expected schema: "
                f"{e.error_count()} validation error(s)"
            ) from e
