"""Tests for application settings."""

import pytest
from pydantic import ValidationError

from memory_curator.config.constants import ClassifierModel
from memory_curator.config.settings import Settings
from memory_curator.errors import ConfigurationError


def test_defaults(bare_settings):
    assert bare_settings.classifier_models == [m.value for m in ClassifierModel]
    assert bare_settings.delete_threshold == 0.7
    assert bare_settings.page_size == 25
    assert bare_settings.sort_column == "created_at"
    assert bare_settings.sort_direction == "desc"
    assert bare_settings.openmemory_base_url == "https://api.openmemory.dev/api/v1"


def test_classifier_models_from_env(monkeypatch):
    monkeypatch.setenv("CLASSIFIER_MODELS", " model-a, model-b ,,model-a")
    settings = Settings(_env_file=None)
    assert settings.classifier_models == ["model-a", "model-b"]


def test_classifier_models_from_json_env(monkeypatch):
    monkeypatch.setenv("CLASSIFIER_MODELS", '["x/one", "y/two"]')
    settings = Settings(_env_file=None)
    assert settings.classifier_models == ["x/one", "y/two"]


def test_credentials_from_env(monkeypatch):
    monkeypatch.setenv("OPENMEMORY_BEARER_TOKEN", "om-token")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    settings = Settings(_env_file=None)
    settings.require_credentials()
    assert settings.openmemory_bearer_token.get_secret_value() == "om-token"
    assert "sk-test" not in repr(settings)


def test_require_credentials_lists_missing(bare_settings):
    with pytest.raises(ConfigurationError) as exc_info:
        bare_settings.require_credentials()
    assert "OPENMEMORY_BEARER_TOKEN" in str(exc_info.value)
    assert "OPENAI_API_KEY" in str(exc_info.value)


def test_require_credentials_inference_only():
    partial = Settings(_env_file=None, openmemory_bearer_token=None, openai_api_key="sk")
    partial.require_credentials(memory_store=False)
    with pytest.raises(ConfigurationError, match="OPENMEMORY_BEARER_TOKEN"):
        partial.require_credentials()


@pytest.mark.parametrize(
    "overrides",
    [
        {"delete_threshold": 1.2},
        {"delete_threshold": -0.1},
        {"page_size": 0},
        {"sort_direction": "sideways"},
        {"log_level": "verbose"},
        {"openmemory_base_url": "ftp://memory"},
        {"openmemory_max_retries": 0},
    ],
)
def test_invalid_values_rejected(overrides):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, **overrides)


def test_normalization():
    settings = Settings(
        _env_file=None,
        log_level="debug",
        sort_direction="ASC",
        openai_base_url="https://openrouter.ai/api/v1/",
    )
    assert settings.log_level == "DEBUG"
    assert settings.sort_direction == "asc"
    assert settings.openai_base_url == "https://openrouter.ai/api/v1"


def test_model_profiles(settings):
    profiles = settings.model_profiles()
    assert list(profiles) == ["model-a", "model-b", "model-c"]
    assert profiles["model-a"].max_tokens == 500
    assert profiles["model-a"].temperature == 0.1


def test_inference_key_always_required(bare_settings):
    with pytest.raises(ConfigurationError) as exc_info:
        bare_settings.require_credentials(memory_store=False)
    assert str(exc_info.value) == "Missing required configuration: OPENAI_API_KEY"
