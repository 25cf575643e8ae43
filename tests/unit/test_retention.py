"""Tests for the retention decision."""

import pytest

from memory_curator.config.constants import ConsensusVerdict
from memory_curator.services.consensus.models import ConsensusResult
from memory_curator.services.retention.policy import Delete, Retain, decide


def _consensus(verdict: ConsensusVerdict, confidence: float) -> ConsensusResult:
    return ConsensusResult(
        final_verdict=verdict,
        confidence=confidence,
        attempts=(),
        successful_count=0,
        failed_count=0,
    )


def test_confident_transient_is_deleted():
    action = decide(_consensus(ConsensusVerdict.TRANSIENT, 0.85), "mem-1")
    assert action == Delete(record_id="mem-1")


def test_unanimous_transient_is_deleted():
    assert isinstance(decide(_consensus(ConsensusVerdict.TRANSIENT, 1.0), "mem-1"), Delete)


def test_threshold_is_inclusive():
    assert isinstance(decide(_consensus(ConsensusVerdict.TRANSIENT, 0.7), "mem-1"), Delete)


def test_weak_transient_is_retained():
    assert decide(_consensus(ConsensusVerdict.TRANSIENT, 0.5), "mem-1") == Retain()


def test_simple_majority_below_default_threshold_is_retained():
    assert isinstance(decide(_consensus(ConsensusVerdict.TRANSIENT, 0.67), "mem-1"), Retain)


@pytest.mark.parametrize("verdict", [ConsensusVerdict.LONG_TERM, ConsensusVerdict.UNCERTAIN])
@pytest.mark.parametrize("confidence", [0.1, 0.5, 0.85, 1.0])
def test_non_transient_is_always_retained(verdict, confidence):
    assert isinstance(decide(_consensus(verdict, confidence), "mem-1"), Retain)


def test_custom_threshold():
    consensus = _consensus(ConsensusVerdict.TRANSIENT, 0.67)
    assert isinstance(decide(consensus, "mem-1", delete_threshold=0.6), Delete)
    assert isinstance(decide(consensus, "mem-1", delete_threshold=0.9), Retain)


def test_invalid_threshold_rejected():
    with pytest.raises(ValueError):
        decide(_consensus(ConsensusVerdict.TRANSIENT, 1.0), "mem-1", delete_threshold=1.5)
