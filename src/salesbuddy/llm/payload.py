"""
Schema for the generative model's analysis answer.

Model output is untrusted: every field is coerced on its own so one bad
field never discards the rest. Text fields fall back to ``""``, list fields
to ``[]`` with every item stringified, unknown sentiments to ``neutral`` and
unnamed competitors are dropped.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from salesbuddy.analysis.intent import RawIntent
from salesbuddy.models.entities import (
    CompetitorInsights,
    CompetitorMention,
    FollowUp,
    Sentiment,
)

_SENTIMENTS = {s.value for s in Sentiment}


def _text(value: Any) -> str:
    """Stringify truthy values; everything falsy becomes ``""``."""
    if not value:
        return ""
    return value if isinstance(value, str) else str(value)


def _text_list(value: Any) -> List[str]:
    """Stringify each item of a list; anything that is not a list is ``[]``."""
    if not isinstance(value, list):
        return []
    return [item if isinstance(item, str) else str(item) for item in value]


def _mapping(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


class _PayloadModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ModelCoaching(_PayloadModel):
    """Only the observations of the model's coaching block are used."""
    observations: List[str] = Field(default_factory=list)

    @field_validator("observations", mode="before")
    @classmethod
    def coerce_observations(cls, v: Any) -> List[str]:
        return _text_list(v)


class ModelAnalysisPayload(_PayloadModel):
    """
    Field-by-field validated view of the model's JSON answer.

    Example:
        >>> payload = ModelAnalysisPayload.model_validate(parse_json_object(raw))
        >>> payload.next_steps
    """

    summary: str = ""
    intent: RawIntent = Field(default_factory=RawIntent)
    signals: List[str] = Field(default_factory=list)
    blockers: List[str] = Field(default_factory=list)
    next_steps: List[str] = Field(default_factory=list)
    follow_up: FollowUp = Field(default_factory=FollowUp)
    coaching: ModelCoaching = Field(default_factory=ModelCoaching)
    competitors: List[CompetitorMention] = Field(default_factory=list)
    competitor_insights: Optional[CompetitorInsights] = None

    @field_validator("summary", mode="before")
    @classmethod
    def coerce_summary(cls, v: Any) -> str:
        return _text(v)

    @field_validator("signals", "blockers", "next_steps", mode="before")
    @classmethod
    def coerce_lists(cls, v: Any) -> List[str]:
        return _text_list(v)

    @field_validator("intent", "coaching", mode="before")
    @classmethod
    def coerce_mapping(cls, v: Any) -> Dict[str, Any]:
        return _mapping(v)

    @field_validator("follow_up", mode="before")
    @classmethod
    def coerce_follow_up(cls, v: Any) -> Dict[str, str]:
        data = _mapping(v)
        return {
            "timing": _text(data.get("timing")),
            "email_draft": _text(data.get("emailDraft")),
            "call_script": _text(data.get("callScript")),
        }

    @field_validator("competitors", mode="before")
    @classmethod
    def coerce_competitors(cls, v: Any) -> List[Dict[str, Any]]:
        if not isinstance(v, list):
            return []
        mentions = []
        for item in v:
            data = _mapping(item)
            name = _text(data.get("name"))
            if not name:
                continue
            sentiment = data.get("sentiment")
            if not isinstance(sentiment, str) or sentiment not in _SENTIMENTS:
                sentiment = Sentiment.NEUTRAL.value
            mentions.append({
                "name": name,
                "context": _text(data.get("context")),
                "sentiment": sentiment,
                "quote": _text(data.get("quote")),
            })
        return mentions

    @field_validator("competitor_insights", mode="before")
    @classmethod
    def coerce_insights(cls, v: Any) -> Optional[Dict[str, Any]]:
        if not isinstance(v, dict):
            return None
        return {
            "top_threat": _text(v.get("topThreat")) or None,
            "positioning": _text_list(v.get("positioning")),
        }
