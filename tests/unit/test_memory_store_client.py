"""Tests for the OpenMemory HTTP client."""

import json
from datetime import datetime, timezone

import httpx
import pytest

from memory_curator.errors import ConfigurationError, MemoryStoreError
from memory_curator.infrastructure.memory_store.client import MemoryStoreClient

VALID_PAGE = {
    "items": [
        {
            "id": "test-id-1",
            "content": "Test memory content",
            "created_at": 1672531200000,
            "state": "active",
            "app_id": "test-app",
            "app_name": "Test App",
            "categories": ["work", "important", "work"],
            "metadata_": {"key": "test-key", "value": "test-value"},
        }
    ],
    "total": 1,
    "page": 1,
    "size": 25,
    "pages": 1,
}


def _client(settings, handler):
    transport = httpx.MockTransport(handler)
    return MemoryStoreClient(settings, http_client=httpx.AsyncClient(transport=transport))


@pytest.mark.asyncio
async def test_fetch_page_sends_filter_request(settings):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=VALID_PAGE)

    page = await _client(settings, handler).fetch_page(page=2, size=10)

    assert seen["method"] == "POST"
    assert seen["url"] == "https://memory.test/api/v1/memories/filter"
    assert seen["auth"] == "Bearer test-token"
    assert seen["body"] == {
        "page": 2,
        "size": 10,
        "sort_column": "created_at",
        "sort_direction": "desc",
    }
    assert page.pages == 1
    item = page.items[0]
    assert item.id == "test-id-1"
    assert item.created_at == datetime(2023, 1, 1, tzinfo=timezone.utc)
    assert item.categories == ["work", "important"]
    assert item.metadata == {"key": "test-key", "value": "test-value"}


@pytest.mark.asyncio
async def test_fetch_page_malformed_response(settings):
    def handler(request):
        return httpx.Response(200, json={"invalid": "missing required fields"})

    with pytest.raises(MemoryStoreError, match="schema"):
        await _client(settings, handler).fetch_page()


@pytest.mark.asyncio
async def test_fetch_page_invalid_json(settings):
    def handler(request):
        return httpx.Response(200, content=b"<html>oops</html>")

    with pytest.raises(MemoryStoreError, match="invalid JSON"):
        await _client(settings, handler).fetch_page()


@pytest.mark.asyncio
async def test_fetch_page_permanent_error_not_retried(settings):
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(401, json={"detail": "Unauthorized"})

    with pytest.raises(MemoryStoreError) as exc_info:
        await _client(settings, handler).fetch_page()

    assert exc_info.value.status_code == 401
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_fetch_page_retries_transient_error(settings):
    calls = []

    def handler(request):
        calls.append(request)
        if len(calls) < 3:
            return httpx.Response(503)
        return httpx.Response(200, json=VALID_PAGE)

    page = await _client(settings, handler).fetch_page()

    assert len(calls) == 3
    assert page.total == 1


@pytest.mark.asyncio
async def test_fetch_page_gives_up_after_max_retries(settings):
    calls = []

    def handler(request):
        calls.append(request)
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(MemoryStoreError, match="connection refused"):
        await _client(settings, handler).fetch_page()

    assert len(calls) == settings.openmemory_max_retries


@pytest.mark.asyncio
async def test_delete_memories(settings):
    seen = {}

    def handler(request):
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"message": "Successfully deleted 1 memories", "user_id": "u1"})

    response = await _client(settings, handler).delete_memories(["test-id-1"])

    assert seen["method"] == "DELETE"
    assert seen["url"] == "https://memory.test/api/v1/memories/"
    assert seen["body"] == {"memory_ids": ["test-id-1"]}
    assert response.message == "Successfully deleted 1 memories"
    assert response.user_id == "u1"


@pytest.mark.asyncio
async def test_delete_memories_server_error(settings):
    def handler(request):
        return httpx.Response(404, json={"detail": "Not found"})

    with pytest.raises(MemoryStoreError) as exc_info:
        await _client(settings, handler).delete_memories(["missing"])
    assert exc_info.value.status_code == 404


def test_missing_token_is_configuration_error(bare_settings):
    with pytest.raises(ConfigurationError):
        MemoryStoreClient(bare_settings)


@pytest.mark.asyncio
async def test_context_manager_closes_owned_client(settings):
    async with MemoryStoreClient(settings) as client:
        inner = client._client
    assert inner.is_closed
