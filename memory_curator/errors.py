"""Exception hierarchy for the memory curator."""


class MemoryCuratorError(Exception):
    """Base class for all memory curator errors."""


class ConfigurationError(MemoryCuratorError):
    """Missing or invalid configuration. Fatal at startup."""


class MemoryStoreError(MemoryCuratorError):
    """The memory store could not be reached or returned an unusable response."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ClassificationError(MemoryCuratorError):
    """A single classifier could not produce a usable verdict."""


class UnsupportedModelError(ClassificationError):
    """The requested model id has no configured profile."""

    def __init__(self, model_id: str):
        super().__init__(f"Unsupported model: {model_id}")
        self.model_id = model_id


class UnclassifiedMemoryError(ClassificationError):
    """The model declined to pick transient or long-term."""

    def __init__(self, model_id: str, reasoning: str):
        super().__init__(f"Model {model_id} returned 'unclassified': {reasoning}")
        self.model_id = model_id
        self.reasoning = reasoning


class ModelOutputError(ClassificationError):
    """The model's structured output did not match the expected schema."""
