"""
Analysis storage interface.

The analyzer never assumes a backing store: it is handed an
``AnalysisStore`` (or none) and only calls ``save``. Listing and lookup are
used by the CLI and any request layer built on top.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from salesbuddy.models.entities import AnalysisListItem, AnalysisResult

DEFAULT_LIST_LIMIT = 20
MAX_LIST_LIMIT = 50


def clamp_limit(limit: Optional[int]) -> int:
    """Bound a requested list size to ``[0, MAX_LIST_LIMIT]``."""
    if limit is None:
        return DEFAULT_LIST_LIMIT
    return max(0, min(int(limit), MAX_LIST_LIMIT))


class AnalysisStore(ABC):
    """
    Abstract base class for analysis stores.

    Subclasses must implement:
        - ``save()`` -- persist a completed analysis
        - ``list()`` -- newest-first summaries
        - ``get()`` -- full analysis by id

    Example:
        >>> class MyStore(AnalysisStore):
        ...     def save(self, analysis): ...
    """

    @abstractmethod
    def save(self, analysis: AnalysisResult) -> AnalysisResult:
        """
        Persist an analysis.

        Args:
            analysis: Completed analysis result

        Returns:
            The saved analysis
        """

    @abstractmethod
    def list(self, limit: int = DEFAULT_LIST_LIMIT) -> List[AnalysisListItem]:
        """
        List the most recent analyses, newest first.

        Args:
            limit: Maximum number of items (capped at MAX_LIST_LIMIT)

        Returns:
            List of analysis summaries
        """

    @abstractmethod
    def get(self, analysis_id: str) -> Optional[AnalysisResult]:
        """
        Look up an analysis by id.

        Returns:
            The analysis, or None if not found
        """
