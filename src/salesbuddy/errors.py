"""
Exception hierarchy for Salesbuddy.

Request-boundary and storage problems are raised to the caller. Failures of
the external generative model are raised by the LLM client but absorbed by
the analyzer, which falls back to a static analysis instead.
"""


class SalesbuddyError(Exception):
    """Base class for all Salesbuddy errors."""


class InvalidTranscriptError(SalesbuddyError, ValueError):
    """Raised when an analysis request carries no usable transcript."""


class LLMError(SalesbuddyError):
    """Raised when the generative model cannot be reached or returns nothing."""


class LLMResponseError(LLMError):
    """Raised when the model answered but the answer is not a JSON object."""


class LLMEmptyResponseError(LLMError):
    """Raised when the model call succeeded but produced no text."""


class StoreError(SalesbuddyError):
    """Raised for unknown storage backends or failed storage operations."""


class AnalysisNotFoundError(StoreError):
    """Raised when an analysis id is not present in the store."""
