"""
Coaching module for LLM-based follow-up help.

Provides rewriting of follow-up drafts and expanded advice for coaching
observations produced by the transcript analysis.
"""

from salesbuddy.coaching.coach import get_coaching_advice, improve_content

__all__ = ["get_coaching_advice", "improve_content"]
