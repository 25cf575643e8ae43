"""Builders for test data."""

from memory_curator.config.constants import Verdict
from memory_curator.infrastructure.memory_store.models import MemoryItem, MemoryPage
from memory_curator.services.classification.models import (
    ClassificationFailure,
    ClassificationResult,
    ClassificationSuccess,
)


def success(model_id: str, verdict: str, confidence: float = 0.9) -> ClassificationSuccess:
    return ClassificationSuccess(
        model_id=model_id,
        result=ClassificationResult(
            model_id=model_id,
            verdict=Verdict(verdict),
            confidence=confidence,
            reasoning=f"{model_id} thinks {verdict}",
        ),
    )


def failure(model_id: str, error: str = "APIConnectionError: boom") -> ClassificationFailure:
    return ClassificationFailure(model_id=model_id, error=error)


def memory_item(item_id: str, content: str = "Pick up milk on the way home") -> MemoryItem:
    return MemoryItem.model_validate(
        {
            "id": item_id,
            "content": content,
            "created_at": 1672531200000,
            "state": "active",
            "app_id": "test-app",
            "app_name": "Test App",
            "categories": ["personal"],
            "metadata_": {},
        }
    )


def memory_page(items: list[MemoryItem], page: int, pages: int, size: int = 25) -> MemoryPage:
    return MemoryPage(items=items, total=len(items), page=page, size=size, pages=pages)
