"""
SQLite-backed analysis store.

Persists each analysis as a camelCase JSON document plus the columns needed
for listing. Uses the shared ``Database`` access layer.

Configuration (store config dict):
    db_path: "data/db/salesbuddy.db"
"""

import logging
import sqlite3
from pathlib import Path
from typing import Any, Dict, List, Optional

from salesbuddy.config import DB_PATH
from salesbuddy.errors import StoreError
from salesbuddy.models.database import Database
from salesbuddy.models.entities import AnalysisListItem, AnalysisResult
from salesbuddy.storage.base import DEFAULT_LIST_LIMIT, AnalysisStore, clamp_limit

logger = logging.getLogger(__name__)


class SqliteAnalysisStore(AnalysisStore):
    """
    Analysis store persisted in a SQLite database.

    Attributes:
        db: Database access layer (schema initialized on construction)
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None) -> None:
        config = config or {}
        self.db = Database(Path(config.get("db_path", DB_PATH)))
        try:
            self.db.initialize()
        except sqlite3.Error as exc:
            raise StoreError(f"Could not open analysis database {self.db.db_path}: {exc}") from exc

    def save(self, analysis: AnalysisResult) -> AnalysisResult:
        try:
            with self.db.get_connection() as conn:
                self.db.insert_analysis(
                    conn,
                    analysis_id=analysis.id,
                    created_at=analysis.created_at,
                    summary=analysis.summary,
                    primary_intent=analysis.intent.primary.value,
                    source=analysis.source.value,
                    result_json=analysis.to_json(indent=None),
                    meeting_date=analysis.meeting_date,
                    account_name=analysis.account_name,
                    seller_name=analysis.seller_name,
                )
        except sqlite3.Error as exc:
            raise StoreError(f"Could not save analysis {analysis.id}: {exc}") from exc

        logger.info("Saved analysis %s (%s)", analysis.id, analysis.source.value)
        return analysis

    def list(self, limit: int = DEFAULT_LIST_LIMIT) -> List[AnalysisListItem]:
        try:
            with self.db.get_connection() as conn:
                rows = self.db.list_analyses(conn, clamp_limit(limit))
        except sqlite3.Error as exc:
            raise StoreError(f"Could not list analyses: {exc}") from exc
        return [_row_to_result(row).to_list_item() for row in rows]

    def get(self, analysis_id: str) -> Optional[AnalysisResult]:
        try:
            with self.db.get_connection() as conn:
                row = self.db.get_analysis(conn, analysis_id)
        except sqlite3.Error as exc:
            raise StoreError(f"Could not load analysis {analysis_id}: {exc}") from exc
        if row is None:
            return None
        return _row_to_result(row)


def _row_to_result(row: sqlite3.Row) -> AnalysisResult:
    return AnalysisResult.model_validate_json(row["result_json"])
