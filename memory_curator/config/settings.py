"""Application settings using Pydantic BaseSettings."""

import json
from dataclasses import dataclass
from functools import lru_cache
from typing import Annotated, Any

from pydantic import SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from memory_curator.config.constants import (
    DEFAULT_DELETE_THRESHOLD,
    ClassifierModel,
    SortDirection,
)
from memory_curator.errors import ConfigurationError

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ModelProfile:
    """Per-model generation parameters."""

    model_id: str
    max_tokens: int
    temperature: float


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Application
    app_name: str = "Memory Curator"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # OpenMemory (memory store)
    openmemory_bearer_token: SecretStr | None = None
    openmemory_base_url: str = "https://api.openmemory.dev/api/v1"
    openmemory_timeout: float = 30.0
    openmemory_max_retries: int = 3
    openmemory_retry_delay: float = 1.0

    # OpenAI-compatible inference endpoint (OpenRouter)
    openai_api_key: SecretStr | None = None
    openai_base_url: str = "https://openrouter.ai/api/v1"
    openai_max_retries: int = 2
    http_referer: str = "https://thesobercoder.in"
    app_title: str = "Memory Manager"

    # Classifiers
    classifier_models: Annotated[list[str], NoDecode] = [m.value for m in ClassifierModel]
    classifier_max_tokens: int = 500
    classifier_temperature: float = 0.1
    classifier_timeout: float = 60.0  # <= 0 disables the per-call timeout

    # Retention
    delete_threshold: float = DEFAULT_DELETE_THRESHOLD

    # Pagination
    page_size: int = 25
    sort_column: str = "created_at"
    sort_direction: str = SortDirection.DESC.value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        upper = v.upper()
        if upper not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {LOG_LEVELS}, got '{v}'")
        return upper

    @field_validator("sort_direction")
    @classmethod
    def validate_sort_direction(cls, v: str) -> str:
        lower = v.lower().strip()
        if lower not in {d.value for d in SortDirection}:
            raise ValueError(f"sort_direction must be 'asc' or 'desc', got '{v}'")
        return lower

    @field_validator("classifier_models", mode="before")
    @classmethod
    def split_classifier_models(cls, v: Any) -> Any:
        """Accept a comma separated string or a JSON array."""
        if isinstance(v, str):
            stripped = v.strip()
            if stripped.startswith("["):
                return json.loads(stripped)
            return [part for part in stripped.split(",")]
        return v

    @field_validator("classifier_models")
    @classmethod
    def normalize_classifier_models(cls, v: list[str]) -> list[str]:
        seen: list[str] = []
        for model_id in v:
            model_id = model_id.strip()
            if model_id and model_id not in seen:
                seen.append(model_id)
        return seen

    @field_validator("openmemory_base_url", "openai_base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"base URL must start with http:// or https://, got '{v}'")
        return v.rstrip("/")

    @model_validator(mode="after")
    def validate_ranges(self) -> "Settings":
        if not 0.0 <= self.delete_threshold <= 1.0:
            raise ValueError(f"delete_threshold must be within [0, 1], got {self.delete_threshold}")
        if self.page_size <= 0:
            raise ValueError(f"page_size must be positive, got {self.page_size}")
        if self.openmemory_timeout <= 0:
            raise ValueError(f"openmemory_timeout must be positive, got {self.openmemory_timeout}")
        if self.openmemory_max_retries < 1:
            raise ValueError(
                f"openmemory_max_retries must be at least 1, got {self.openmemory_max_retries}"
            )
        if self.classifier_max_tokens <= 0:
            raise ValueError(
                f"classifier_max_tokens must be positive, got {self.classifier_max_tokens}"
            )
        return self

    def require_credentials(self, memory_store: bool = True) -> None:
        """Raise ConfigurationError if any credential needed for a run is missing."""
        missing = []
        if memory_store and (
            not self.openmemory_bearer_token or not self.openmemory_bearer_token.get_secret_value()
        ):
            missing.append("OPENMEMORY_BEARER_TOKEN")
        if not self.openai_api_key or not self.openai_api_key.get_secret_value():
            missing.append("OPENAI_API_KEY")
        if missing:
            raise ConfigurationError(f"Missing required configuration: {', '.join(missing)}")

    def model_profiles(self) -> dict[str, ModelProfile]:
        """Generation parameters for every configured classifier model."""
        return {
            model_id: ModelProfile(
                model_id=model_id,
                max_tokens=self.classifier_max_tokens,
                temperature=self.classifier_temperature,
            )
            for model_id in self.classifier_models
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
