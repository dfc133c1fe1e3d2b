"""
Shared test fixtures.

Provides pytest fixtures for common test resources including:
- Sample transcripts (labelled, unlabelled, with competitors)
- A scripted LLM client that never touches the network
- Temporary SQLite and in-memory stores
- A well-formed model answer for the analysis prompt
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

from salesbuddy.errors import LLMError
from salesbuddy.storage.memory import InMemoryAnalysisStore
from salesbuddy.storage.sqlite import SqliteAnalysisStore


SAMPLE_TRANSCRIPT = """Alex: Thanks for joining today. What are your biggest challenges with forecasting?
Jordan (CFO): Mostly we lack visibility into pipeline and deals slip every quarter.
Alex: Do you use a CRM?
Jordan (CFO): Yes, we have Salesforce but nobody trusts the data.
"""


class FakeLLMClient:
    """
    Stand-in for LLMClient that returns scripted responses.

    Each call pops the next response; an Exception instance is raised
    instead of returned. Sent messages are recorded in ``calls``.
    """

    def __init__(self, responses: Optional[List[Any]] = None):
        self.responses = list(responses or [])
        self.calls: List[Dict[str, Any]] = []

    def complete(self, messages, max_tokens=2500):
        self.calls.append({"messages": messages, "max_tokens": max_tokens})
        if not self.responses:
            raise LLMError("No scripted response left")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def sample_transcript() -> str:
    """Two-speaker call with a seller named Alex and a CFO."""
    return SAMPLE_TRANSCRIPT


@pytest.fixture
def unlabelled_transcript() -> str:
    """Transcript with no speaker labels at all."""
    return "hello there\nwe should talk about pricing\nsounds good"


@pytest.fixture
def model_answer() -> Dict[str, Any]:
    """A well-formed JSON answer for the analysis prompt."""
    return {
        "summary": "CFO wants better pipeline visibility.",
        "intent": {"buyNow": 10, "buySoon": 60, "later": 20, "noFit": 10, "primary": "BuySoon"},
        "signals": ["Pain with forecasting", "Budget owner present"],
        "blockers": ["Existing CRM contract"],
        "nextSteps": ["Send recap", "Book demo", "Loop in RevOps"],
        "followUp": {
            "timing": "Tomorrow",
            "emailDraft": "Hi Jordan, thanks for the time today.",
            "callScript": "Open with the forecasting pain.",
        },
        "coaching": {
            "talkRatio": {"sellerPct": 99, "customerPct": 1, "sellerWords": 1, "customerWords": 1},
            "questionScore": {"sellerQuestions": 9, "openQuestions": 9, "score": 100},
            "observations": ["Good discovery opener."],
        },
        "competitors": [
            {
                "name": "Salesforce",
                "context": "Current CRM",
                "sentiment": "negative",
                "quote": "nobody trusts the data",
            }
        ],
        "competitorInsights": {"topThreat": "Salesforce", "positioning": ["Lead with data quality"]},
    }


@pytest.fixture
def model_answer_json(model_answer) -> str:
    """The model answer serialized the way the API returns it."""
    return json.dumps(model_answer)


@pytest.fixture
def fake_llm():
    """Factory for FakeLLMClient instances."""
    def _make(*responses):
        return FakeLLMClient(list(responses))
    return _make


@pytest.fixture
def memory_store() -> InMemoryAnalysisStore:
    """Fresh in-memory store."""
    return InMemoryAnalysisStore()


@pytest.fixture
def sqlite_store(tmp_path: Path) -> SqliteAnalysisStore:
    """SQLite store in a temporary directory."""
    return SqliteAnalysisStore({"db_path": tmp_path / "db" / "salesbuddy.db"})
