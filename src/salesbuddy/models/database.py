"""
Database management and data access layer.

Provides a Database class for managing SQLite connections and helper methods
for inserting and reading stored analyses. Includes connection management
and UTF-8 support for transcripts in any language.
"""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import List, Optional

from .schema import create_all_tables


class Database:
    """
    Database connection and query management.

    Example:
        >>> db = Database(Path("data/db/salesbuddy.db"))
        >>> db.initialize()
        >>> with db.get_connection() as conn:
        ...     row = db.get_analysis(conn, "3f2c...")
    """

    def __init__(self, db_path: Path):
        """
        Initialize database manager.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def initialize(self) -> None:
        """
        Initialize database schema.

        Creates all tables and indexes if they don't exist.
        Safe to call multiple times (idempotent).
        """
        create_all_tables(self.db_path)

    @contextmanager
    def get_connection(self):
        """
        Context manager for database connections.

        Commits on success, rolls back and re-raises on error, and always
        closes the connection.

        Yields:
            sqlite3.Connection: Database connection with row factory set
        """
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row  # Enable column access by name
        conn.execute("PRAGMA encoding = 'UTF-8'")
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def insert_analysis(
        self,
        conn: sqlite3.Connection,
        analysis_id: str,
        created_at: str,
        summary: str,
        primary_intent: str,
        source: str,
        result_json: str,
        meeting_date: Optional[str] = None,
        account_name: Optional[str] = None,
        seller_name: Optional[str] = None,
    ) -> None:
        """
        Insert a completed analysis.

        Args:
            conn: Database connection
            analysis_id: Unique analysis id
            created_at: Creation timestamp (ISO-8601 format)
            summary: Analysis summary text
            primary_intent: Primary intent bucket label
            source: ``llm`` or ``fallback``
            result_json: Full camelCase result document
            meeting_date: Meeting date as entered (optional)
            account_name: Account name (optional)
            seller_name: Seller name (optional)

        Raises:
            sqlite3.IntegrityError: If an analysis with the same id exists
        """
        conn.execute(
            """
            INSERT INTO analyses (
                id, created_at, meeting_date, account_name, seller_name,
                summary, primary_intent, source, result_json, seq
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?,
                      (SELECT COALESCE(MAX(seq), 0) + 1 FROM analyses))
            """,
            (
                analysis_id,
                created_at,
                meeting_date,
                account_name,
                seller_name,
                summary,
                primary_intent,
                source,
                result_json,
            ),
        )

    def get_analysis(
        self, conn: sqlite3.Connection, analysis_id: str
    ) -> Optional[sqlite3.Row]:
        """
        Retrieve an analysis by id.

        Returns:
            Analysis row or None if not found
        """
        cursor = conn.execute("SELECT * FROM analyses WHERE id = ?", (analysis_id,))
        return cursor.fetchone()

    def list_analyses(
        self, conn: sqlite3.Connection, limit: int
    ) -> List[sqlite3.Row]:
        """
        Retrieve the most recent analyses, newest first.

        Args:
            conn: Database connection
            limit: Maximum number of rows

        Returns:
            List of analysis rows
        """
        cursor = conn.execute(
            "SELECT * FROM analyses ORDER BY seq DESC LIMIT ?",
            (limit,),
        )
        return cursor.fetchall()

    def count_analyses(self, conn: sqlite3.Connection) -> int:
        """Return the number of stored analyses."""
        return conn.execute("SELECT COUNT(*) FROM analyses").fetchone()[0]
