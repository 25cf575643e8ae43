"""Pipeline run state."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from memory_curator.services.consensus.models import ConsensusResult
from memory_curator.services.retention.policy import Delete, RetentionAction


@dataclass
class RecordOutcome:
    """What happened to one memory during a run."""

    record_id: str
    consensus: ConsensusResult
    action: RetentionAction
    deleted: bool = False
    delete_error: Optional[str] = None
    duration_ms: float = 0.0

    @property
    def wants_delete(self) -> bool:
        return isinstance(self.action, Delete)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "record_id": self.record_id,
            "action": "delete" if self.wants_delete else "retain",
            "deleted": self.deleted,
            "delete_error": self.delete_error,
            "duration_ms": round(self.duration_ms, 2),
            "consensus": self.consensus.to_dict(),
        }


@dataclass
class RunSummary:
    """Counters and outcomes for one pipeline run."""

    dry_run: bool = False

    # Pagination
    pages_fetched: int = 0
    page_failures: int = 0
    total_pages: int = 0

    # Records
    processed: int = 0
    deleted: int = 0
    marked_for_deletion: int = 0  # Delete decisions, including dry-run ones
    retained: int = 0
    delete_failures: int = 0
    record_failures: int = 0  # Records skipped after an unexpected error
    verdicts: Dict[str, int] = field(default_factory=dict)

    outcomes: List[RecordOutcome] = field(default_factory=list)

    def add(self, outcome: RecordOutcome) -> None:
        """Fold one record outcome into the counters."""
        self.outcomes.append(outcome)
        self.processed += 1
        verdict = outcome.consensus.final_verdict.value
        self.verdicts[verdict] = self.verdicts.get(verdict, 0) + 1

        if not outcome.wants_delete:
            self.retained += 1
            return
        self.marked_for_deletion += 1
        if outcome.deleted:
            self.deleted += 1
        elif outcome.delete_error is not None:
            self.delete_failures += 1

    def to_dict(self, include_outcomes: bool = True) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "dry_run": self.dry_run,
            "pages_fetched": self.pages_fetched,
            "page_failures": self.page_failures,
            "total_pages": self.total_pages,
            "processed": self.processed,
            "deleted": self.deleted,
            "marked_for_deletion": self.marked_for_deletion,
            "retained": self.retained,
            "delete_failures": self.delete_failures,
            "record_failures": self.record_failures,
            "verdicts": dict(self.verdicts),
        }
        if include_outcomes:
            data["outcomes"] = [outcome.to_dict() for outcome in self.outcomes]
        return data
