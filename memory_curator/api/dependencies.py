"""FastAPI dependencies."""

from memory_curator.config.settings import Settings, get_settings


def get_settings_dependency() -> Settings:
    """Get settings as a FastAPI dependency."""
    return get_settings()
