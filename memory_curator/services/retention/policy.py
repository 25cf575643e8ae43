"""Retain/delete decision for a consensus result."""

from dataclasses import dataclass
from typing import Union

from memory_curator.config.constants import DEFAULT_DELETE_THRESHOLD, ConsensusVerdict
from memory_curator.services.consensus.models import ConsensusResult


@dataclass(frozen=True)
class Delete:
    """Delete the memory."""

    record_id: str


@dataclass(frozen=True)
class Retain:
    """Keep the memory."""


RetentionAction = Union[Delete, Retain]


def decide(
    consensus: ConsensusResult,
    record_id: str,
    delete_threshold: float = DEFAULT_DELETE_THRESHOLD,
) -> RetentionAction:
    """
    Delete only a confidently transient memory.

    long-term and uncertain verdicts are always retained, whatever the
    confidence.
    """
    if not 0.0 <= delete_threshold <= 1.0:
        raise ValueError(f"delete_threshold must be within [0, 1], got {delete_threshold}")

    if (
        consensus.final_verdict == ConsensusVerdict.TRANSIENT
        and consensus.confidence >= delete_threshold
    ):
        return Delete(record_id=record_id)
    return Retain()
