"""Classification service models."""

from dataclasses import dataclass
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from memory_curator.config.constants import ModelClassification, Verdict


class ModelOutput(BaseModel):
    """Structured output every classifier model must return."""

    model_config = ConfigDict(extra="forbid")

    classification: ModelClassification = Field(
        description="One of 'transient', 'long-term' or 'unclassified'"
    )
    confidence: float = Field(description="Confidence between 0.0 and 1.0")
    reasoning: str = Field(description="Why the classification was chosen")

    @field_validator("classification", mode="before")
    @classmethod
    def normalize_classification(cls, v: Any) -> Any:
        """Ensure classification is lowercase and stripped."""
        return v.lower().strip() if isinstance(v, str) else v

    @field_validator("confidence", mode="before")
    @classmethod
    def require_number(cls, v: Any) -> Any:
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError("confidence must be a number")
        return v


@dataclass(frozen=True)
class ClassificationResult:
    """A usable verdict from one model for one memory."""

    model_id: str
    verdict: Verdict
    confidence: float
    reasoning: str

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"confidence must be within [0, 1], got {self.confidence}")

    @classmethod
    def from_output(cls, model_id: str, output: ModelOutput) -> "ClassificationResult":
        """Build a result from a directional model output, clamping confidence."""
        return cls(
            model_id=model_id,
            verdict=Verdict(output.classification.value),
            confidence=min(max(float(output.confidence), 0.0), 1.0),
            reasoning=output.reasoning,
        )


@dataclass(frozen=True)
class ClassificationSuccess:
    """Attempt that produced a verdict."""

    model_id: str
    result: ClassificationResult

    @property
    def succeeded(self) -> bool:
        return True

    def to_dict(self) -> dict[str, Any]:
        return {
            "model_id": self.model_id,
            "status": "success",
            "verdict": self.result.verdict.value,
            "confidence": self.result.confidence,
            "reasoning": self.result.reasoning,
        }


@dataclass(frozen=True)
class ClassificationFailure:
    """Attempt that failed for any reason."""

    model_id: str
    error: str

    @property
    def succeeded(self) -> bool:
        return False

    def to_dict(self) -> dict[str, Any]:
        return {
            "model_id": self.model_id,
            "status": "failed",
            "error": self.error,
        }


ClassificationAttempt = Union[ClassificationSuccess, ClassificationFailure]
