"""
Transcript analysis orchestration.

Combines the locally computed coaching metrics with qualitative fields
(summary, signals, blockers, next steps, follow-up drafts, competitor
mentions) from an external generative model. When no model is configured,
or the model call or its JSON fails, a static fallback analysis is returned
instead; the caller always gets a complete result.

This module is designed to be used in two ways:

1. **Programmatic** -- build a ``TranscriptAnalyzer`` and call ``analyze()``.
2. **CLI** -- invoked via ``salesbuddy analyze transcript.txt``.

Example:
    >>> analyzer = TranscriptAnalyzer.from_config(get_config())
    >>> result = analyzer.analyze(AnalysisRequest(transcript=text, seller_name="Alex"))
    >>> print(result.intent.primary, result.coaching.talk_ratio.seller_pct)
"""

import json
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from pydantic import ValidationError

from salesbuddy.analysis.competitors import detect_competitors
from salesbuddy.analysis.intent import normalize_intent
from salesbuddy.analysis.metrics import compute_coaching_metrics
from salesbuddy.config import DEFAULT_LEXICON, CoachingLexicon, Config, load_lexicon
from salesbuddy.errors import InvalidTranscriptError
from salesbuddy.llm.client import LLMClient
from salesbuddy.llm.parsing import parse_json_object
from salesbuddy.llm.payload import ModelAnalysisPayload
from salesbuddy.models.entities import (
    AnalysisRequest,
    AnalysisResult,
    AnalysisSource,
    CoachingMetrics,
    FollowUp,
    IntentBucket,
    IntentScore,
)
from salesbuddy.storage.base import AnalysisStore

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
#  Fallback content
# ---------------------------------------------------------------------------

FALLBACK_SUMMARY = (
    "Transcript analyzed with a fallback model. "
    "Configure an LLM API key for richer insights."
)
FALLBACK_INTENT = IntentScore(
    buy_now=25,
    buy_soon=35,
    later=25,
    no_fit=15,
    primary=IntentBucket.BUY_SOON,
)
FALLBACK_SIGNALS = ("No strong intent cues detected from the transcript.",)
FALLBACK_BLOCKERS = ("Budget, timeline, and decision-maker clarity are unconfirmed.",)
FALLBACK_NEXT_STEPS = (
    "Confirm the decision timeline and stakeholders.",
    "Share a tailored recap and proposed next meeting.",
    "Align on success criteria for the buyer.",
)
FALLBACK_FOLLOW_UP = FollowUp(
    timing="Within 48 hours",
    email_draft=(
        "Thanks again for the conversation. I wanted to recap key goals and "
        "confirm timeline and stakeholders before our next step."
    ),
    call_script=(
        "I wanted to confirm the decision timeline and who needs to be "
        "involved so we can move forward."
    ),
)

SYSTEM_PROMPT = "You are an expert sales analyst who provides concise, actionable insights."


# ---------------------------------------------------------------------------
#  Request boundary
# ---------------------------------------------------------------------------

def parse_request(payload: Mapping[str, Any]) -> AnalysisRequest:
    """
    Validate an untrusted request payload.

    Args:
        payload: camelCase or snake_case request fields

    Returns:
        AnalysisRequest

    Raises:
        InvalidTranscriptError: If the transcript is missing, not a string,
            blank, or the other fields fail validation
    """
    transcript = payload.get("transcript") if isinstance(payload, Mapping) else None
    if not isinstance(transcript, str) or not transcript.strip():
        raise InvalidTranscriptError("Transcript is required.")
    try:
        return AnalysisRequest.model_validate(dict(payload))
    except ValidationError as exc:
        raise InvalidTranscriptError(f"Invalid analysis request: {exc}") from exc


# ---------------------------------------------------------------------------
#  Prompt construction
# ---------------------------------------------------------------------------

def build_prompt(request: AnalysisRequest, coaching: CoachingMetrics) -> str:
    """Build the analysis prompt, embedding the fixed coaching metrics."""
    participants = ", ".join(request.participants or []) or "Unknown"
    talk = coaching.talk_ratio
    questions = coaching.question_score
    coaching_json = json.dumps(coaching.to_dict(), indent=2)

    return f"""
You are a sales meeting analyst. Return ONLY valid JSON, no markdown.

Meeting metadata:
- Account: {request.account_name or "Unknown"}
- Date: {request.meeting_date or "Unknown"}
- Seller: {request.seller_name or "Unknown"}
- Participants: {participants}
- Notes: {request.notes or "None"}

Computed coaching metrics (do not change these numbers):
{coaching_json}

Return JSON with this exact shape:
{{
  "summary": "string",
  "intent": {{
    "buyNow": number,
    "buySoon": number,
    "later": number,
    "noFit": number,
    "primary": "BuyNow|BuySoon|Later|NoFit"
  }},
  "signals": ["string", "..."],
  "blockers": ["string", "..."],
  "nextSteps": ["string", "..."],
  "followUp": {{
    "timing": "string",
    "emailDraft": "string",
    "callScript": "string"
  }},
  "coaching": {{
    "talkRatio": {{
      "sellerPct": {talk.seller_pct},
      "customerPct": {talk.customer_pct},
      "sellerWords": {talk.seller_words},
      "customerWords": {talk.customer_words}
    }},
    "questionScore": {{
      "sellerQuestions": {questions.seller_questions},
      "openQuestions": {questions.open_questions},
      "score": {questions.score}
    }},
    "observations": ["string", "..."]
  }},
  "competitors": [
    {{
      "name": "competitor company name",
      "context": "brief description of why/how they were mentioned",
      "sentiment": "positive|negative|neutral",
      "quote": "exact quote from transcript mentioning competitor"
    }}
  ],
  "competitorInsights": {{
    "topThreat": "name of most threatening competitor or null if none",
    "positioning": ["counter-positioning suggestion 1", "suggestion 2"]
  }}
}}

Rules:
- intent values must sum to 100.
- keep arrays 3-5 items when possible.
- use plain text, no markdown.
- be concise and actionable.
- competitors: identify any competitor companies mentioned in the transcript (e.g., Salesforce, HubSpot, Gong, etc.)
- if no competitors mentioned, return empty array for competitors and null for competitorInsights
"""


def build_messages(request: AnalysisRequest, coaching: CoachingMetrics) -> List[Dict[str, str]]:
    """System prompt, analysis instructions, then the transcript itself."""
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": build_prompt(request, coaching)},
        {"role": "user", "content": f"Transcript:\n{request.transcript}"},
    ]


# ---------------------------------------------------------------------------
#  Result assembly
# ---------------------------------------------------------------------------

def _request_fields(request: AnalysisRequest) -> Dict[str, Any]:
    return {
        "meeting_date": request.meeting_date,
        "account_name": request.account_name,
        "participants": request.participants,
        "seller_name": request.seller_name,
        "notes": request.notes,
    }


def merge_model_payload(
    request: AnalysisRequest,
    payload: ModelAnalysisPayload,
    coaching: CoachingMetrics,
) -> Dict[str, Any]:
    """
    Merge the model's qualitative fields with the local coaching metrics.

    The metrics are kept as computed; only a non-empty list of model
    observations replaces the default observations.
    """
    observations = payload.coaching.observations or coaching.observations
    return {
        **_request_fields(request),
        "summary": payload.summary,
        "intent": normalize_intent(payload.intent),
        "signals": payload.signals,
        "blockers": payload.blockers,
        "next_steps": payload.next_steps,
        "follow_up": payload.follow_up,
        "coaching": coaching.model_copy(update={"observations": list(observations)}),
        "competitors": payload.competitors or None,
        "competitor_insights": payload.competitor_insights,
        "source": AnalysisSource.LLM,
    }


def fallback_analysis(
    request: AnalysisRequest,
    coaching: CoachingMetrics,
    lexicon: CoachingLexicon = DEFAULT_LEXICON,
) -> Dict[str, Any]:
    """
    Build the static analysis used when the model is unavailable.

    Everything except coaching metrics and competitor keyword hits is canned
    text, and the result is labelled ``source=fallback``.
    """
    competitors, insights = detect_competitors(request.transcript, lexicon.competitor_keywords)
    return {
        **_request_fields(request),
        "summary": FALLBACK_SUMMARY,
        "intent": FALLBACK_INTENT,
        "signals": list(FALLBACK_SIGNALS),
        "blockers": list(FALLBACK_BLOCKERS),
        "next_steps": list(FALLBACK_NEXT_STEPS),
        "follow_up": FALLBACK_FOLLOW_UP,
        "coaching": coaching,
        "competitors": competitors,
        "competitor_insights": insights,
        "source": AnalysisSource.FALLBACK,
    }


# ---------------------------------------------------------------------------
#  Orchestrator
# ---------------------------------------------------------------------------

class TranscriptAnalyzer:
    """
    Produces a complete AnalysisResult for a transcript.

    Attributes:
        llm_client: Generative model client, or None for fallback-only
        store: Optional store every result is saved to
        lexicon: Keyword lists for the local heuristics
        max_tokens: Completion budget for the analysis call
    """

    def __init__(
        self,
        llm_client: Optional[LLMClient] = None,
        store: Optional[AnalysisStore] = None,
        lexicon: CoachingLexicon = DEFAULT_LEXICON,
        max_tokens: int = 2500,
    ) -> None:
        self.llm_client = llm_client
        self.store = store
        self.lexicon = lexicon
        self.max_tokens = max_tokens

    @classmethod
    def from_config(
        cls,
        config: Config,
        store: Optional[AnalysisStore] = None,
    ) -> "TranscriptAnalyzer":
        """Wire the analyzer from configuration and salesbuddy.yaml."""
        return cls(
            llm_client=LLMClient.from_config(config),
            store=store,
            lexicon=load_lexicon(),
            max_tokens=config.llm_max_tokens,
        )

    def analyze(self, request: AnalysisRequest) -> AnalysisResult:
        """
        Analyze a transcript.

        Coaching metrics are always computed locally. The model is asked for
        the qualitative fields when a client is configured; any failure on
        that path is logged and replaced by the fallback analysis.

        Args:
            request: Analysis request with the transcript and metadata

        Returns:
            The new AnalysisResult (saved to the store when one is set)
        """
        coaching = compute_coaching_metrics(
            request.transcript, request.seller_name, self.lexicon
        )

        fields: Optional[Dict[str, Any]] = None
        if self.llm_client is None:
            logger.info("No LLM client configured; using fallback analysis")
        else:
            try:
                fields = self._analyze_with_model(request, coaching)
            except Exception as exc:
                logger.warning("Model analysis failed, using fallback: %s", exc)

        if fields is None:
            fields = fallback_analysis(request, coaching, self.lexicon)

        result = AnalysisResult(
            id=str(uuid.uuid4()),
            created_at=datetime.now(timezone.utc).isoformat(),
            **fields,
        )

        if self.store is not None:
            self.store.save(result)
        return result

    def _analyze_with_model(
        self,
        request: AnalysisRequest,
        coaching: CoachingMetrics,
    ) -> Dict[str, Any]:
        raw = self.llm_client.complete(
            build_messages(request, coaching),
            max_tokens=self.max_tokens,
        )
        payload = ModelAnalysisPayload.model_validate(parse_json_object(raw))
        return merge_model_payload(request, payload, coaching)
