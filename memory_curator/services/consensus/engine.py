"""
Majority-vote consensus over classifier attempts.

Confidence reflects how strongly the classifiers agree, not what they
report about themselves:

    unanimous           -> 1.0
    ratio >= 0.7        -> 0.85
    ratio >  0.5        -> 0.67
    tie                 -> 0.5
    < 2 successful      -> 0.1  (verdict is always "uncertain")

Per-model confidences stay on the attempts for auditing only.
"""

from collections.abc import Iterable

from memory_curator.config.constants import (
    INSUFFICIENT_SIGNAL_CONFIDENCE,
    MIN_SUCCESSFUL_CLASSIFIERS,
    SIMPLE_MAJORITY_CONFIDENCE,
    STRONG_MAJORITY_CONFIDENCE,
    STRONG_MAJORITY_RATIO,
    TIE_CONFIDENCE,
    UNANIMOUS_CONFIDENCE,
    ConsensusVerdict,
    Verdict,
)
from memory_curator.services.classification.models import ClassificationAttempt
from memory_curator.services.consensus.models import ConsensusResult


def calculate_confidence(total_successful: int, majority_votes: int) -> float:
    """Map the winning vote share to a confidence bucket."""
    if total_successful == 0:
        return INSUFFICIENT_SIGNAL_CONFIDENCE

    ratio = majority_votes / total_successful

    if ratio == 1.0:
        return UNANIMOUS_CONFIDENCE
    if ratio >= STRONG_MAJORITY_RATIO:
        return STRONG_MAJORITY_CONFIDENCE
    if ratio > 0.5:
        return SIMPLE_MAJORITY_CONFIDENCE
    return TIE_CONFIDENCE


def calculate_consensus(attempts: Iterable[ClassificationAttempt]) -> ConsensusResult:
    """Aggregate attempts into a final verdict and confidence. Pure."""
    attempts = tuple(attempts)
    successes = [a for a in attempts if a.succeeded]
    successful_count = len(successes)
    failed_count = sum(1 for a in attempts if not a.succeeded)

    if successful_count < MIN_SUCCESSFUL_CLASSIFIERS:
        return ConsensusResult(
            final_verdict=ConsensusVerdict.UNCERTAIN,
            confidence=INSUFFICIENT_SIGNAL_CONFIDENCE,
            attempts=attempts,
            successful_count=successful_count,
            failed_count=failed_count,
        )

    transient_votes = sum(1 for a in successes if a.result.verdict == Verdict.TRANSIENT)
    long_term_votes = sum(1 for a in successes if a.result.verdict == Verdict.LONG_TERM)

    if transient_votes > long_term_votes:
        final_verdict = ConsensusVerdict.TRANSIENT
        confidence = calculate_confidence(successful_count, transient_votes)
    elif long_term_votes > transient_votes:
        final_verdict = ConsensusVerdict.LONG_TERM
        confidence = calculate_confidence(successful_count, long_term_votes)
    else:
        final_verdict = ConsensusVerdict.UNCERTAIN
        confidence = TIE_CONFIDENCE

    return ConsensusResult(
        final_verdict=final_verdict,
        confidence=confidence,
        attempts=attempts,
        successful_count=successful_count,
        failed_count=failed_count,
    )
