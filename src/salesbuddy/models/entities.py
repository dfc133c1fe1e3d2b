"""
Pydantic data models for analysis requests, results and coaching metrics.

Defines type-safe data models with validation for every record that crosses
the core's boundary. Attribute names are snake_case; serialization uses the
camelCase names of the JSON contract (``model_dump(by_alias=True)``).
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class IntentBucket(str, Enum):
    """Buying-stage category."""
    BUY_NOW = "BuyNow"
    BUY_SOON = "BuySoon"
    LATER = "Later"
    NO_FIT = "NoFit"


class Sentiment(str, Enum):
    """Tone of a competitor mention."""
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class AnalysisSource(str, Enum):
    """Where the qualitative fields of an analysis came from."""
    LLM = "llm"
    FALLBACK = "fallback"


class WireModel(BaseModel):
    """Base model serialized with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a camelCase dictionary for JSON serialization."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_json(self, indent: int = 2) -> str:
        """Serialize to a camelCase JSON string."""
        return self.model_dump_json(indent=indent, by_alias=True, exclude_none=True)


class TalkRatio(WireModel):
    """Split of spoken words between seller and customer."""
    seller_pct: int = Field(ge=0, le=100)
    customer_pct: int = Field(ge=0, le=100)
    seller_words: int = Field(ge=0)
    customer_words: int = Field(ge=0)

    @model_validator(mode="after")
    def check_complement(self) -> "TalkRatio":
        """Validate seller_pct + customer_pct == 100."""
        if self.seller_pct + self.customer_pct != 100:
            raise ValueError("seller_pct and customer_pct must sum to 100")
        return self


class QuestionScore(WireModel):
    """How many seller questions were open (exploratory) questions."""
    seller_questions: int = Field(ge=0)
    open_questions: int = Field(ge=0)
    score: int = Field(ge=0, le=100)


class CoachingMetrics(WireModel):
    """
    Deterministic coaching metrics computed from the transcript.

    These numbers are authoritative; the generative model may only
    replace the observations list.
    """
    talk_ratio: TalkRatio
    question_score: QuestionScore
    observations: List[str] = Field(default_factory=list)


class IntentScore(WireModel):
    """
    Normalized intent distribution.

    The four buckets are integers that always sum to exactly 100.
    """
    buy_now: int = Field(ge=0, le=100)
    buy_soon: int = Field(ge=0, le=100)
    later: int = Field(ge=0, le=100)
    no_fit: int = Field(ge=0, le=100)
    primary: IntentBucket

    @model_validator(mode="after")
    def check_total(self) -> "IntentScore":
        """Validate that the buckets sum to 100."""
        total = self.buy_now + self.buy_soon + self.later + self.no_fit
        if total != 100:
            raise ValueError(f"intent buckets must sum to 100, got {total}")
        return self


class FollowUp(WireModel):
    """Suggested follow-up timing and drafts."""
    timing: str = ""
    email_draft: str = ""
    call_script: str = ""


class CompetitorMention(WireModel):
    """A competitor named in the transcript."""
    name: str
    context: str = ""
    sentiment: Sentiment = Sentiment.NEUTRAL
    quote: str = ""


class CompetitorInsights(WireModel):
    """Competitive summary across all mentions."""
    top_threat: Optional[str] = None
    positioning: List[str] = Field(default_factory=list)


class AnalysisRequest(WireModel):
    """
    Transcript-analysis request.

    Build it through ``parse_request`` when the payload comes from an
    untrusted source; the core assumes ``transcript`` is a string.
    """
    transcript: str
    meeting_date: Optional[str] = None
    account_name: Optional[str] = None
    participants: Optional[List[str]] = None
    seller_name: Optional[str] = None
    notes: Optional[str] = None


class AnalysisResult(WireModel):
    """
    Complete analysis record.

    Created once per request and immutable afterwards. Persistence is
    handled by an AnalysisStore, never by the analyzer itself.
    """
    id: str
    created_at: str
    meeting_date: Optional[str] = None
    account_name: Optional[str] = None
    participants: Optional[List[str]] = None
    seller_name: Optional[str] = None
    notes: Optional[str] = None
    summary: str
    intent: IntentScore
    signals: List[str] = Field(default_factory=list)
    blockers: List[str] = Field(default_factory=list)
    next_steps: List[str] = Field(default_factory=list)
    follow_up: FollowUp = Field(default_factory=FollowUp)
    coaching: CoachingMetrics
    competitors: Optional[List[CompetitorMention]] = None
    competitor_insights: Optional[CompetitorInsights] = None
    source: AnalysisSource = AnalysisSource.LLM

    def to_list_item(self) -> "AnalysisListItem":
        """Project this result onto its list summary."""
        return AnalysisListItem(
            id=self.id,
            created_at=self.created_at,
            meeting_date=self.meeting_date,
            account_name=self.account_name,
            summary=self.summary,
            intent=self.intent,
        )


class AnalysisListItem(WireModel):
    """Summary row returned when listing stored analyses."""
    id: str
    created_at: str
    meeting_date: Optional[str] = None
    account_name: Optional[str] = None
    summary: str
    intent: IntentScore


class CoachingAdvice(WireModel):
    """Expanded coaching guidance for one observation."""
    observation: str
    why_it_matters: str
    actionable_tips: List[str] = Field(default_factory=list)
    example_phrases: List[str] = Field(default_factory=list)
    related_metrics: List[str] = Field(default_factory=list)
