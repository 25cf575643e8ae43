"""
Completion executor for single structured-output calls.
"""
import logging
from typing import Any

from openai import AsyncOpenAI
from pydantic import BaseModel

from memory_curator.config.settings import ModelProfile

logger = logging.getLogger(__name__)


def _response_format(response_model: type[BaseModel]) -> dict[str, Any]:
    """JSON-schema response format derived from a pydantic model."""
    return {
        "type": "json_schema",
        "json_schema": {
            "name": response_model.__name__,
            "schema": response_model.model_json_schema(),
        },
    }


async def run_completion(
    client: AsyncOpenAI,
    profile: ModelProfile,
    system_prompt: str | None,
    user_content: str,
    response_model: type[BaseModel] | None = None,
) -> str:
    """
    Execute one chat completion and return the raw assistant text.

    No retry happens here; the OpenAI client applies its own transport
    retries (``openai_max_retries``).

    Args:
        client: AsyncOpenAI client
        profile: Model id and generation parameters
        system_prompt: Optional system prompt
        user_content: User message
        response_model: Optional pydantic model requested as structured output

    Returns:
        The assistant message content ("" if the model returned none)
    """
    messages: list[dict[str, str]] = []
    if system_prompt:
        messages.append({"role": "system", "content": system_prompt})
    messages.append({"role": "user", "content": user_content})

    kwargs: dict[str, Any] = {
        "model": profile.model_id,
        "messages": messages,
        "max_tokens": profile.max_tokens,
        "temperature": profile.temperature,
    }
    if response_model is not None:
        kwargs["response_format"] = _response_format(response_model)

    completion = await client.chat.completions.create(**kwargs)

    if not completion.choices:
        logger.warning("run_completion: no choices returned by %s", profile.model_id)
        return ""
    content = completion.choices[0].message.content or ""
    logger.debug("run_completion: %s returned %d chars", profile.model_id, len(content))
    return content
