"""Ad-hoc classification endpoint."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from memory_curator.api.dependencies import get_settings_dependency
from memory_curator.api.models import ClassifyRequest, ClassifyResponse
from memory_curator.config.settings import Settings
from memory_curator.errors import ConfigurationError
from memory_curator.services.classification.classifier import MemoryClassifier
from memory_curator.services.classification.fan_out import ClassificationFanOut
from memory_curator.services.consensus.engine import calculate_consensus
from memory_curator.services.retention.policy import Delete, decide

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/classify", response_model=ClassifyResponse)
async def classify(
    request: ClassifyRequest,
    settings: Settings = Depends(get_settings_dependency),  # noqa: B008
) -> dict[str, Any]:
    """
    Classify one piece of content with every model and return the consensus.

    Nothing is deleted; ``action`` reports what a cleanup run would do.
    """
    try:
        settings.require_credentials(memory_store=False)
    except ConfigurationError as e:
        raise HTTPException(status_code=503, detail=str(e)) from e

    model_ids = request.models or settings.classifier_models
    fan_out = ClassificationFanOut(MemoryClassifier(settings))
    attempts = await fan_out.classify_all(model_ids, request.content)
    consensus = calculate_consensus(attempts)
    action = decide(consensus, request.record_id, settings.delete_threshold)

    logger.info(
        "Ad-hoc classification: %s (%.2f) -> %s",
        consensus.final_verdict.value,
        consensus.confidence,
        type(action).__name__,
    )

    data = consensus.to_dict()
    data["action"] = "delete" if isinstance(action, Delete) else "retain"
    return data
