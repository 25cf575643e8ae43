"""
JSON Parser utility for extracting JSON from LLM responses.
"""
import json
import logging
import re
from typing import Any, Dict

logger = logging.getLogger(__name__)

_CODE_BLOCK = re.compile(r"```(?:json)?\s*(\{.*?\})\s*```", re.DOTALL)
_ANY_OBJECT = re.compile(r"(\{.*\})", re.DOTALL)
_ANSWER_TAG = re.compile(r"<answer>\s*(.*?)\s*</answer>", re.DOTALL | re.IGNORECASE)


class JSONParser:
    """Helper class to extract clean JSON from LLM responses."""

    @staticmethod
    def _loads_object(candidate: str) -> Dict[str, Any] | None:
        try:
            value = json.loads(candidate)
        except json.JSONDecodeError:
            return None
        return value if isinstance(value, dict) else None

    @classmethod
    def _search(cls, text: str) -> Dict[str, Any] | None:
        for pattern in (_CODE_BLOCK, _ANY_OBJECT):
            match = pattern.search(text)
            if match:
                parsed = cls._loads_object(match.group(1))
                if parsed is not None:
                    return parsed
        return None

    @classmethod
    def extract_json(cls, text: str) -> Dict[str, Any]:
        """Attempts to extract a JSON object from text.

        Returns an empty dict when nothing parseable is found; callers
        decide whether that is an error.
        """
        if not text:
            return {}

        parsed = cls._loads_object(text.strip())
        if parsed is not None:
            return parsed

        # Some models wrap the answer in <answer> tags
        answer_match = _ANSWER_TAG.search(text)
        if answer_match:
            parsed = cls._search(answer_match.group(1))
            if parsed is not None:
                return parsed

        parsed = cls._search(text)
        if parsed is not None:
            return parsed

        logger.warning("JSONParser: Could not extract JSON from text, returning empty dict")
        return {}
