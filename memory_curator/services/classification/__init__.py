"""Per-model classification and concurrent fan-out."""

from memory_curator.services.classification.classifier import MemoryClassifier, parse_model_output
from memory_curator.services.classification.fan_out import ClassificationFanOut
from memory_curator.services.classification.models import (
    ClassificationAttempt,
    ClassificationFailure,
    ClassificationResult,
    ClassificationSuccess,
    ModelOutput,
)

__all__ = [
    "MemoryClassifier",
    "parse_model_output",
    "ClassificationFanOut",
    "ClassificationAttempt",
    "ClassificationFailure",
    "ClassificationResult",
    "ClassificationSuccess",
    "ModelOutput",
]
