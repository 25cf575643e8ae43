"""
Constants, enums, and static values.
"""

from enum import Enum


class Verdict(str, Enum):
    """Durability verdict a classifier may vote for."""

    TRANSIENT = "transient"  # Candidate for deletion
    LONG_TERM = "long-term"  # Keep


class ModelClassification(str, Enum):
    """Raw classification vocabulary of the model output."""

    TRANSIENT = "transient"
    LONG_TERM = "long-term"
    UNCLASSIFIED = "unclassified"  # Treated as a classifier failure


class ConsensusVerdict(str, Enum):
    """Final verdict after aggregating every classifier."""

    TRANSIENT = "transient"
    LONG_TERM = "long-term"
    UNCERTAIN = "uncertain"


class ClassifierModel(str, Enum):
    """Default classifier models (OpenRouter ids)."""

    GEMINI = "google/gemini-2.5-flash"
    DEEPSEEK = "deepseek/deepseek-chat-v3-0324"
    GPT_4O_MINI = "openai/gpt-4o-mini"


class SortDirection(str, Enum):
    """Sort direction accepted by the memory store filter endpoint."""

    ASC = "asc"
    DESC = "desc"


class PipelineStep(str, Enum):
    """Pipeline execution steps."""

    FETCH_PAGE = "fetch_page"
    CLASSIFY = "classify"
    CONSENSUS = "consensus"
    DECIDE = "decide"
    DELETE = "delete"


class PipelineStepDescription(str, Enum):
    """Pipeline execution step descriptions."""

    FETCH_PAGE = "Fetch one page of memories from the memory store"
    CLASSIFY = "Classify the memory with every configured model"
    CONSENSUS = "Aggregate the classifier votes into one verdict"
    DECIDE = "Decide whether to retain or delete the memory"
    DELETE = "Delete the memory from the memory store"


# Consensus confidence buckets
MIN_SUCCESSFUL_CLASSIFIERS = 2
INSUFFICIENT_SIGNAL_CONFIDENCE = 0.1
UNANIMOUS_CONFIDENCE = 1.0
STRONG_MAJORITY_RATIO = 0.7
STRONG_MAJORITY_CONFIDENCE = 0.85
SIMPLE_MAJORITY_CONFIDENCE = 0.67
TIE_CONFIDENCE = 0.5

DEFAULT_DELETE_THRESHOLD = 0.7


def log_pipeline_step(logger, step: PipelineStep, detail: str = "") -> None:
    """Log the start of a pipeline step with its description."""
    description = PipelineStepDescription[step.name].value
    if detail:
        logger.debug("%s: %s (%s)", step.value, description, detail)
    else:
        logger.debug("%s: %s", step.value, description)
