"""Pytest configuration and fixtures."""

import pytest

from memory_curator.config.settings import Settings

MODEL_IDS = ["model-a", "model-b", "model-c"]


@pytest.fixture
def settings():
    """Provide settings fixture, isolated from the developer's .env."""
    return Settings(
        _env_file=None,
        openmemory_bearer_token="test-token",
        openmemory_base_url="https://memory.test/api/v1",
        openmemory_retry_delay=0.0,
        openai_api_key="test-key",
        classifier_models=MODEL_IDS,
    )


@pytest.fixture
def bare_settings():
    """Settings without any credentials."""
    return Settings(_env_file=None, openmemory_bearer_token=None, openai_api_key=None)
