"""OpenMemory request/response models."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from memory_curator.config.constants import SortDirection


class MemoryItem(BaseModel):
    """A stored memory as returned by the filter endpoint."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    content: str
    created_at: datetime  # Wire value is epoch milliseconds
    state: str
    app_id: str
    app_name: str
    categories: list[str] = Field(default_factory=list)
    metadata: dict[str, Any] = Field(default_factory=dict, alias="metadata_")

    @field_validator("categories")
    @classmethod
    def dedupe_categories(cls, v: list[str]) -> list[str]:
        return list(dict.fromkeys(v))

    @field_validator("metadata", mode="before")
    @classmethod
    def none_metadata(cls, v: Any) -> Any:
        return {} if v is None else v


class MemoryPage(BaseModel):
    """One page of the filter endpoint."""

    items: list[MemoryItem]
    total: int
    page: int
    size: int
    pages: int


class FilterRequest(BaseModel):
    """Body of POST /memories/filter."""

    page: int = Field(default=1, ge=1)
    size: int = Field(default=25, ge=1)
    sort_column: str = "created_at"
    sort_direction: SortDirection = SortDirection.DESC


class DeleteRequest(BaseModel):
    """Body of DELETE /memories/."""

    memory_ids: list[str] = Field(..., min_length=1)


class DeleteResponse(BaseModel):
    """Response of DELETE /memories/."""

    message: str
    user_id: str | None = None
