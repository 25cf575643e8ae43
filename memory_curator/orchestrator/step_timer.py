"""Async context manager for timing and logging pipeline steps."""

import logging
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from memory_curator.config.constants import PipelineStep, log_pipeline_step
from memory_curator.infrastructure.logging.logger import StructuredLogger

logger = logging.getLogger(__name__)


class StepContext:
    """Mutable context for a timed pipeline step."""

    def __init__(self) -> None:
        self.result: dict[str, Any] | None = None
        self.elapsed_ms: float = 0.0

    def set_result(self, result: dict[str, Any]) -> None:
        self.result = result


@asynccontextmanager
async def timed_step(
    step: PipelineStep,
    structured_logger: StructuredLogger,
    detail: str = "",
) -> AsyncGenerator[StepContext, None]:
    """Time a pipeline step and log its result, if one was set."""
    log_pipeline_step(logger, step, detail)
    ctx = StepContext()
    start = time.perf_counter()
    try:
        yield ctx
    finally:
        ctx.elapsed_ms = (time.perf_counter() - start) * 1000
        if ctx.result is not None:
            structured_logger.log_step(step.value, ctx.result, duration_ms=ctx.elapsed_ms)
