"""Consensus service models."""

from dataclasses import dataclass
from typing import Any

from memory_curator.config.constants import ConsensusVerdict
from memory_curator.services.classification.models import ClassificationAttempt


@dataclass(frozen=True)
class ConsensusResult:
    """Aggregated verdict for one memory."""

    final_verdict: ConsensusVerdict
    confidence: float
    attempts: tuple[ClassificationAttempt, ...]
    successful_count: int
    failed_count: int

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"confidence must be within [0, 1], got {self.confidence}")
        if self.successful_count + self.failed_count != len(self.attempts):
            raise ValueError(
                "successful_count + failed_count must equal the number of attempts "
                f"({self.successful_count} + {self.failed_count} != {len(self.attempts)})"
            )

    def to_dict(self) -> dict[str, Any]:
        return {
            "final_verdict": self.final_verdict.value,
            "confidence": self.confidence,
            "successful_count": self.successful_count,
            "failed_count": self.failed_count,
            "attempts": [attempt.to_dict() for attempt in self.attempts],
        }
