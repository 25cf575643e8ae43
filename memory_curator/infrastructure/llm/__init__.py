"""LLM infrastructure."""

from memory_curator.infrastructure.llm.executor import run_completion
from memory_curator.infrastructure.llm.factory import (
    close_shared_client,
    create_openai_client,
    get_shared_client,
)

__all__ = [
    "run_completion",
    "create_openai_client",
    "get_shared_client",
    "close_shared_client",
]
