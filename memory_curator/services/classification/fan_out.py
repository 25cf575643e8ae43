"""Concurrent fan-out of one memory to every classifier model."""

import asyncio
import logging
from collections.abc import Sequence
from typing import Protocol

from memory_curator.services.classification.classifier import describe_error
from memory_curator.services.classification.models import (
    ClassificationAttempt,
    ClassificationFailure,
)

logger = logging.getLogger(__name__)


class ClassifierInvoker(Protocol):
    """Anything that turns (model, content) into an attempt."""

    async def invoke(self, model_id: str, content: str) -> ClassificationAttempt: ...


class ClassificationFanOut:
    """Runs every model concurrently and waits for all of them to settle."""

    def __init__(self, classifier: ClassifierInvoker):
        self.classifier = classifier

    async def classify_all(
        self, model_ids: Sequence[str], content: str
    ) -> list[ClassificationAttempt]:
        """
        Classify *content* with every model in *model_ids*.

        Returns exactly one attempt per model id, in input order. A failing
        model never cancels or affects its siblings.
        """
        if not model_ids:
            return []

        settled = await asyncio.gather(
            *[self.classifier.invoke(model_id, content) for model_id in model_ids],
            return_exceptions=True,
        )

        attempts: list[ClassificationAttempt] = []
        for model_id, outcome in zip(model_ids, settled):
            if isinstance(outcome, BaseException):
                if isinstance(outcome, asyncio.CancelledError):
                    raise outcome
                logger.error(
                    "Invoker for %s raised instead of returning a failure: %s",
                    model_id,
                    outcome,
                )
                attempts.append(
                    ClassificationFailure(model_id=model_id, error=describe_error(outcome))
                )
            else:
                attempts.append(outcome)
        return attempts
