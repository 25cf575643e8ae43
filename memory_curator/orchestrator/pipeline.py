"""Retention pipeline orchestrator."""

import logging
import time
from collections.abc import Sequence

from memory_curator.config.constants import PipelineStep
from memory_curator.config.settings import Settings
from memory_curator.infrastructure.logging.logger import StructuredLogger
from memory_curator.infrastructure.memory_store.client import MemoryStore
from memory_curator.infrastructure.memory_store.models import MemoryItem
from memory_curator.orchestrator.state import RecordOutcome, RunSummary
from memory_curator.orchestrator.step_timer import timed_step
from memory_curator.services.classification.classifier import describe_error
from memory_curator.services.classification.fan_out import ClassificationFanOut
from memory_curator.services.consensus.engine import calculate_consensus
from memory_curator.services.retention.policy import Delete, decide

logger = logging.getLogger(__name__)


class RetentionPipeline:
    """Pages through the memory store and deletes confidently transient memories.

    Pages and records are processed strictly in sequence; only the
    per-record classifier fan-out runs concurrently.
    """

    def __init__(
        self,
        settings: Settings,
        store: MemoryStore,
        fan_out: ClassificationFanOut,
        *,
        model_ids: Sequence[str] | None = None,
        delete_threshold: float | None = None,
        page_size: int | None = None,
        dry_run: bool = False,
        max_pages: int | None = None,
    ):
        """Initialize the pipeline with its collaborators."""
        self.settings = settings
        self.store = store
        self.fan_out = fan_out
        self.model_ids = list(model_ids) if model_ids is not None else list(settings.classifier_models)
        self.delete_threshold = (
            delete_threshold if delete_threshold is not None else settings.delete_threshold
        )
        self.page_size = page_size or settings.page_size
        self.dry_run = dry_run
        self.max_pages = max_pages
        self.structured_logger = StructuredLogger(__name__)

    async def run(self) -> RunSummary:
        """
        Process every page reported by the memory store.

        The loop continues while the page number does not exceed the page
        count of the most recent successful response. A failed fetch counts
        as an empty page and leaves that page count unchanged, so a failure
        on the first page ends the run.
        """
        summary = RunSummary(dry_run=self.dry_run)
        logger.info(
            "Starting retention run (models=%s, threshold=%.2f, dry_run=%s)",
            self.model_ids,
            self.delete_threshold,
            self.dry_run,
        )

        page = 1
        while True:
            if self.max_pages is not None and page > self.max_pages:
                logger.info("Reached max_pages=%s, stopping", self.max_pages)
                break

            items = await self._fetch_page(page, summary)
            for item in items:
                try:
                    outcome = await self.process_record(item)
                except Exception as e:
                    summary.record_failures += 1
                    self.structured_logger.log_error(
                        PipelineStep.CLASSIFY.value, e, context={"record_id": item.id}
                    )
                    continue
                summary.add(outcome)

            page += 1
            if page > summary.total_pages:
                break

        logger.info(
            "Retention run finished: processed=%d deleted=%d retained=%d "
            "delete_failures=%d record_failures=%d page_failures=%d",
            summary.processed,
            summary.deleted,
            summary.retained,
            summary.delete_failures,
            summary.record_failures,
            summary.page_failures,
        )
        return summary

    async def _fetch_page(self, page: int, summary: RunSummary) -> list[MemoryItem]:
        async with timed_step(PipelineStep.FETCH_PAGE, self.structured_logger, f"page {page}") as step:
            try:
                response = await self.store.fetch_page(
                    page=page,
                    size=self.page_size,
                    sort_column=self.settings.sort_column,
                    sort_direction=self.settings.sort_direction,
                )
            except Exception as e:
                summary.page_failures += 1
                self.structured_logger.log_error(
                    PipelineStep.FETCH_PAGE.value, e, context={"page": page}
                )
                return []

            summary.pages_fetched += 1
            summary.total_pages = response.pages
            step.set_result(
                {
                    "page": response.page,
                    "pages": response.pages,
                    "total": response.total,
                    "items": len(response.items),
                }
            )
            return response.items

    async def process_record(self, item: MemoryItem) -> RecordOutcome:
        """Classify, aggregate, decide and (maybe) delete one memory."""
        start = time.perf_counter()

        async with timed_step(PipelineStep.CLASSIFY, self.structured_logger, item.id) as step:
            attempts = await self.fan_out.classify_all(self.model_ids, item.content)
            step.set_result(
                {"record_id": item.id, "attempts": [a.to_dict() for a in attempts]}
            )

        async with timed_step(PipelineStep.CONSENSUS, self.structured_logger, item.id) as step:
            consensus = calculate_consensus(attempts)
            step.set_result(
                {
                    "record_id": item.id,
                    "final_verdict": consensus.final_verdict.value,
                    "confidence": consensus.confidence,
                }
            )

        async with timed_step(PipelineStep.DECIDE, self.structured_logger, item.id) as step:
            action = decide(consensus, item.id, self.delete_threshold)
            outcome = RecordOutcome(record_id=item.id, consensus=consensus, action=action)
            step.set_result(
                {"record_id": item.id, "action": "delete" if outcome.wants_delete else "retain"}
            )

        if isinstance(action, Delete) and not self.dry_run:
            async with timed_step(PipelineStep.DELETE, self.structured_logger, item.id) as step:
                await self._delete(action, outcome)
                step.set_result(
                    {
                        "record_id": item.id,
                        "deleted": outcome.deleted,
                        "error": outcome.delete_error,
                    }
                )

        outcome.duration_ms = (time.perf_counter() - start) * 1000
        return outcome

    async def _delete(self, action: Delete, outcome: RecordOutcome) -> None:
        try:
            response = await self.store.delete_memories([action.record_id])
        except Exception as e:
            outcome.delete_error = describe_error(e)
            self.structured_logger.log_error(
                PipelineStep.DELETE.value, e, context={"record_id": action.record_id}
            )
            return

        outcome.deleted = True
        logger.info("Deleted memory %s: %s", action.record_id, response.message)
