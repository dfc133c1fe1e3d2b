"""
Analysis module for coaching metrics, intent scoring and competitor detection.

The orchestrator lives in ``salesbuddy.analysis.analyzer`` and is imported
from there directly, since it depends on the LLM layer.
"""

from salesbuddy.analysis.metrics import compute_coaching_metrics
from salesbuddy.analysis.intent import normalize_intent
from salesbuddy.analysis.competitors import detect_competitors

__all__ = ["compute_coaching_metrics", "normalize_intent", "detect_competitors"]
