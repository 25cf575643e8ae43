"""Request/Response models for API endpoints."""

from typing import Any, Literal

from pydantic import BaseModel, Field


class ClassifyRequest(BaseModel):
    """Request model for the classify endpoint."""

    content: str = Field(..., description="Memory content to classify")
    record_id: str = Field("", description="Optional memory id, echoed in the decision")
    models: list[str] | None = Field(
        None, description="Model ids to fan out to; defaults to the configured models"
    )


class AttemptResponse(BaseModel):
    """One classifier attempt."""

    model_id: str
    status: Literal["success", "failed"]
    verdict: str | None = None
    confidence: float | None = None
    reasoning: str | None = None
    error: str | None = None


class ClassifyResponse(BaseModel):
    """Response model for the classify endpoint."""

    final_verdict: Literal["transient", "long-term", "uncertain"]
    confidence: float = Field(..., ge=0.0, le=1.0)
    successful_count: int
    failed_count: int
    action: Literal["delete", "retain"] = Field(
        ..., description="What a cleanup run would do with this memory"
    )
    attempts: list[AttemptResponse]


class CleanupRequest(BaseModel):
    """Request model for the cleanup endpoint."""

    dry_run: bool = Field(True, description="Decide without deleting anything")
    max_pages: int | None = Field(None, ge=1, description="Stop after this many pages")
    delete_threshold: float | None = Field(None, ge=0.0, le=1.0)


class CleanupResponse(BaseModel):
    """Response model for the cleanup endpoint."""

    dry_run: bool
    pages_fetched: int
    page_failures: int
    total_pages: int
    processed: int
    deleted: int
    marked_for_deletion: int
    retained: int
    delete_failures: int
    record_failures: int
    verdicts: dict[str, int]
    outcomes: list[dict[str, Any]] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """Response model for health endpoint."""

    status: str = Field(..., description="Service status")
    version: str = Field(..., description="Application version")
