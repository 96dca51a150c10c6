"""
JSON Parser utility for extracting JSON from LLM responses.
"""
import json
import logging
import re
from typing import Any

logger = logging.getLogger(__name__)


class JSONParser:
    """Helper class to extract clean JSON from LLM responses."""

    @staticmethod
    def _try_load(candidate: str) -> dict[str, Any] | None:
        try:
            data = json.loads(candidate)
        except json.JSONDecodeError:
            return None
        return data if isinstance(data, dict) else None

    @staticmethod
    def extract_json(text: str) -> dict[str, Any]:
        """Attempts to extract a JSON object from text."""
        if not text:
            return {}

        data = JSONParser._try_load(text)
        if data is not None:
            return data

        # Try to find JSON inside <answer> tags
        answer_match = re.search(r"<answer>\s*(.*?)\s*</answer>", text, re.DOTALL | re.IGNORECASE)
        if answer_match:
            text = answer_match.group(1)
            data = JSONParser._try_load(text)
            if data is not None:
                return data

        # Fallback: try to find JSON in code blocks
        match = re.search(r"```(?:json)?\s*(\{.*?\})\s*```", text, re.DOTALL)
        if match:
            data = JSONParser._try_load(match.group(1))
            if data is not None:
                return data

        # Fallback: try to find any JSON object
        match = re.search(r"(\{.*\})", text, re.DOTALL)
        if match:
            data = JSONParser._try_load(match.group(1))
            if data is not None:
                return data

        logger.warning("Could not extract JSON from text (first 200 chars): %s", text[:200])
        return {}
