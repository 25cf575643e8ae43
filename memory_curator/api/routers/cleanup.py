"""Cleanup run endpoint."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from memory_curator.api.dependencies import get_settings_dependency
from memory_curator.api.models import CleanupRequest, CleanupResponse
from memory_curator.config.settings import Settings
from memory_curator.errors import ConfigurationError
from memory_curator.infrastructure.memory_store.client import MemoryStoreClient
from memory_curator.orchestrator.pipeline import RetentionPipeline
from memory_curator.services.classification.classifier import MemoryClassifier
from memory_curator.services.classification.fan_out import ClassificationFanOut

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/cleanup", response_model=CleanupResponse)
async def cleanup(
    request: CleanupRequest,
    settings: Settings = Depends(get_settings_dependency),  # noqa: B008
) -> dict[str, Any]:
    """
    Run the retention pipeline over the whole memory store.

    Defaults to a dry run; pass ``dry_run=false`` to actually delete.
    """
    try:
        settings.require_credentials()
    except ConfigurationError as e:
        raise HTTPException(status_code=503, detail=str(e)) from e

    if not request.dry_run:
        logger.warning("Cleanup requested via API with deletion enabled")

    async with MemoryStoreClient(settings) as store:
        pipeline = RetentionPipeline(
            settings,
            store,
            ClassificationFanOut(MemoryClassifier(settings)),
            delete_threshold=request.delete_threshold,
            dry_run=request.dry_run,
            max_pages=request.max_pages,
        )
        summary = await pipeline.run()

    return summary.to_dict()
