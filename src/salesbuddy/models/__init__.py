"""
Data models and database management.

Provides Pydantic data models for requests, results and coaching metrics,
plus the SQLite schema and access layer used by the sqlite analysis store.
"""

from salesbuddy.models.database import Database
from salesbuddy.models.schema import create_all_tables, get_table_names, SCHEMA_SQL
from salesbuddy.models.entities import (
    AnalysisListItem,
    AnalysisRequest,
    AnalysisResult,
    AnalysisSource,
    CoachingAdvice,
    CoachingMetrics,
    CompetitorInsights,
    CompetitorMention,
    FollowUp,
    IntentBucket,
    IntentScore,
    QuestionScore,
    Sentiment,
    TalkRatio,
)

__all__ = [
    "Database",
    "create_all_tables",
    "get_table_names",
    "SCHEMA_SQL",
    "AnalysisListItem",
    "AnalysisRequest",
    "AnalysisResult",
    "AnalysisSource",
    "CoachingAdvice",
    "CoachingMetrics",
    "CompetitorInsights",
    "CompetitorMention",
    "FollowUp",
    "IntentBucket",
    "IntentScore",
    "QuestionScore",
    "Sentiment",
    "TalkRatio",
]
