"""
Generative model access: HTTP client, JSON recovery and answer schema.
"""

from salesbuddy.llm.client import LLMClient
from salesbuddy.llm.parsing import parse_json_object, safe_json_parse

__all__ = ["LLMClient", "parse_json_object", "safe_json_parse"]
