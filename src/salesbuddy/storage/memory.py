"""
In-process analysis store.

Keeps analyses in a per-instance list, newest first. Nothing is shared
between instances, so each test or CLI run gets its own store.
"""

from typing import Any, Dict, List, Optional

from salesbuddy.models.entities import AnalysisListItem, AnalysisResult
from salesbuddy.storage.base import DEFAULT_LIST_LIMIT, AnalysisStore, clamp_limit

class InMemoryAnalysisStore(AnalysisStore):
    """Analysis store backed by a Python list."""

    def __init__(self, config: Optional[Dict[str, Any]] = None) -> None:
        self._analyses: List[AnalysisResult] = []

    def save(self, analysis: AnalysisResult) -> AnalysisResult:
        self._analyses.insert(0, analysis)
        return analysis

    def list(self, limit: int = DEFAULT_LIST_LIMIT) -> List[AnalysisListItem]:
        return [item.to_list_item() for item in self._analyses[:clamp_limit(limit)]]

    def get(self, analysis_id: str) -> Optional[AnalysisResult]:
        return next((item for item in self._analyses if item.id == analysis_id), None)
