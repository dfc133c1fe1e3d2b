"""
SQLite schema and database initialization.

Defines the table that stores completed transcript analyses. The full
result is kept as JSON; the columns needed for listing are duplicated so
the list view never has to decode every document.
"""

import sqlite3
from pathlib import Path
from typing import List


SCHEMA_SQL = """
-- ============================================================
-- ANALYSES: One row per completed transcript analysis
-- ============================================================
CREATE TABLE IF NOT EXISTS analyses (
    id              TEXT    PRIMARY KEY,
    created_at      TEXT    NOT NULL,  -- ISO-8601 format
    meeting_date    TEXT,
    account_name    TEXT,
    seller_name     TEXT,
    summary         TEXT    NOT NULL,
    primary_intent  TEXT    NOT NULL CHECK (primary_intent IN ('BuyNow', 'BuySoon', 'Later', 'NoFit')),
    source          TEXT    NOT NULL DEFAULT 'llm' CHECK (source IN ('llm', 'fallback')),
    result_json     TEXT    NOT NULL,  -- camelCase AnalysisResult document
    seq             INTEGER NOT NULL   -- insertion order, newest has the highest value
);

CREATE INDEX IF NOT EXISTS idx_analyses_seq ON analyses(seq);
CREATE INDEX IF NOT EXISTS idx_analyses_account ON analyses(account_name);
"""


def create_all_tables(db_path: Path) -> None:
    """
    Create all tables and indexes.

    Safe to call repeatedly; every statement is ``IF NOT EXISTS``.

    Args:
        db_path: Path to SQLite database file
    """
    conn = sqlite3.connect(str(db_path))
    try:
        conn.executescript(SCHEMA_SQL)
        conn.commit()
    finally:
        conn.close()


def get_table_names(db_path: Path) -> List[str]:
    """
    List user tables in the database.

    Args:
        db_path: Path to SQLite database file

    Returns:
        Sorted table names
    """
    conn = sqlite3.connect(str(db_path))
    try:
        cursor = conn.execute(
            "SELECT name FROM sqlite_master WHERE type = 'table' "
            "AND name NOT LIKE 'sqlite_%' ORDER BY name"
        )
        return [row[0] for row in cursor.fetchall()]
    finally:
        conn.close()
