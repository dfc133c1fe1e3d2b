"""
Lenient JSON extraction from model output.

Models asked for "only JSON" still wrap it in prose or code fences now and
then. The whole text is parsed first; failing that, the substring between
the first ``{`` and the last ``}``.
"""

import json
from typing import Any, Dict, Optional

from salesbuddy.errors import LLMResponseError


def safe_json_parse(raw: str) -> Optional[Any]:
    """Parse JSON, retrying on the outermost brace span. None on failure."""
    try:
        return json.loads(raw)
    except (TypeError, ValueError):
        pass

    start = raw.find("{")
    end = raw.rfind("}")
    if start >= 0 and end > start:
        try:
            return json.loads(raw[start:end + 1])
        except ValueError:
            return None
    return None


def parse_json_object(raw: str) -> Dict[str, Any]:
    """
    Parse model output that must be a JSON object.

    Raises:
        LLMResponseError: If no JSON object can be recovered
    """
    parsed = safe_json_parse(raw)
    if not isinstance(parsed, dict):
        raise LLMResponseError(f"Invalid JSON from model: {raw[:200]}")
    return parsed
