"""Memory durability classifier (one model, one memory)."""

import asyncio
import logging

from openai import AsyncOpenAI
from pydantic import ValidationError

from memory_curator.config.constants import ModelClassification
from memory_curator.config.prompts import (
    build_classification_system_prompt,
    build_classification_user_prompt,
)
from memory_curator.config.settings import ModelProfile, Settings
from memory_curator.errors import (
    ModelOutputError,
    UnclassifiedMemoryError,
    UnsupportedModelError,
)
from memory_curator.infrastructure.llm.executor import run_completion
from memory_curator.infrastructure.llm.factory import get_shared_client
from memory_curator.services.classification.models import (
    ClassificationAttempt,
    ClassificationFailure,
    ClassificationResult,
    ClassificationSuccess,
    ModelOutput,
)
from memory_curator.utils.json_parser import JSONParser

logger = logging.getLogger(__name__)


def parse_model_output(text: str) -> ModelOutput:
    """
    Parse and validate a model's raw response.

    Args:
        text: Raw assistant message (may wrap the JSON in a code block)

    Returns:
        Validated ModelOutput

    Raises:
        ModelOutputError: If no JSON object is found or it fails validation
    """
    data = JSONParser.extract_json(text)
    if not data:
        raise ModelOutputError(f"No JSON object in model output: {text[:200]!r}")
    try:
        return ModelOutput.model_validate(data)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) or "<root>" for err in e.errors())
        raise ModelOutputError(f"Model output failed validation ({fields})") from e


def describe_error(error: BaseException) -> str:
    """Short human-readable description of a classifier failure."""
    if isinstance(error, (TimeoutError, asyncio.TimeoutError)):
        return "TimeoutError: classifier call timed out"
    message = str(error)
    return f"{type(error).__name__}: {message}" if message else type(error).__name__


class MemoryClassifier:
    """Classifies a memory as transient or long-term with a single model."""

    def __init__(
        self,
        settings: Settings,
        client: AsyncOpenAI | None = None,
        profiles: dict[str, ModelProfile] | None = None,
    ):
        """
        Initialize the classifier.

        Args:
            settings: Application settings
            client: Optional OpenAI client (defaults to the shared client)
            profiles: Supported models; defaults to the configured classifier models
        """
        self.settings = settings
        self._client = client
        self.profiles = profiles if profiles is not None else settings.model_profiles()
        self.timeout = settings.classifier_timeout if settings.classifier_timeout > 0 else None
        self.system_prompt = build_classification_system_prompt()

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = get_shared_client(self.settings)
        return self._client

    async def classify(self, model_id: str, content: str) -> ClassificationResult:
        """
        Classify one memory with one model.

        Raises:
            UnsupportedModelError: If the model has no configured profile
            UnclassifiedMemoryError: If the model declines to decide
            ModelOutputError: If the response does not match the schema
            Exception: Transport errors from the OpenAI client, TimeoutError
        """
        profile = self.profiles.get(model_id)
        if profile is None:
            raise UnsupportedModelError(model_id)

        call = run_completion(
            self.client,
            profile,
            self.system_prompt,
            build_classification_user_prompt(content),
            response_model=ModelOutput,
        )
        raw = await asyncio.wait_for(call, timeout=self.timeout)

        output = parse_model_output(raw)
        if output.classification == ModelClassification.UNCLASSIFIED:
            raise UnclassifiedMemoryError(model_id, output.reasoning)

        return ClassificationResult.from_output(model_id, output)

    async def invoke(self, model_id: str, content: str) -> ClassificationAttempt:
        """
        Classify and fold every failure into a ClassificationFailure.

        Never raises (except on cancellation).
        """
        try:
            result = await self.classify(model_id, content)
        except Exception as e:
            error = describe_error(e)
            logger.warning("Classifier %s failed: %s", model_id, error)
            return ClassificationFailure(model_id=model_id, error=error)

        logger.debug(
            "Classifier %s: %s (%.2f)", model_id, result.verdict.value, result.confidence
        )
        return ClassificationSuccess(model_id=model_id, result=result)
