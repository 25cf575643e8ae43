"""OpenMemory store client and wire models."""

from memory_curator.infrastructure.memory_store.client import MemoryStore, MemoryStoreClient
from memory_curator.infrastructure.memory_store.models import (
    DeleteResponse,
    MemoryItem,
    MemoryPage,
)

__all__ = [
    "MemoryStore",
    "MemoryStoreClient",
    "MemoryItem",
    "MemoryPage",
    "DeleteResponse",
]
