"""
Salesbuddy

Sales call transcript analysis: buying intent, blockers, next steps,
coaching metrics and competitor mentions, with a rule-based fallback when
no generative model is configured.
"""

__version__ = "0.1.0"
__author__ = "Salesbuddy Team"

from salesbuddy.config import Config

__all__ = ["Config", "__version__"]
