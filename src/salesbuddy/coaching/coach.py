"""
LLM-based coaching helpers.

Two follow-ups to a transcript analysis:
- Rewriting a follow-up email or call script (``improve_content``)
- Expanding a coaching observation into concrete advice
  (``get_coaching_advice``), with canned advice when no model is available

See ``salesbuddy.analysis.analyzer`` for the main analysis flow.
"""

import logging
from typing import Any, Dict, List, Optional

from salesbuddy.errors import LLMEmptyResponseError, LLMError
from salesbuddy.llm.client import LLMClient
from salesbuddy.llm.parsing import parse_json_object
from salesbuddy.models.entities import CoachingAdvice

logger = logging.getLogger(__name__)

CONTENT_KINDS = ("email", "callScript")

IMPROVE_MAX_TOKENS = 1500
ADVICE_MAX_TOKENS = 1000

EMAIL_PROMPT = """You are an expert sales copywriter. Improve the following sales follow-up email to be more:
- Professional and personalized
- Clear and concise
- Action-oriented with specific next steps
- Properly formatted with clear paragraphs
- Free of spelling and grammar errors

Keep the same general message and intent, but make it more compelling and polished.
Return ONLY the improved email text, no explanations."""

CALL_SCRIPT_PROMPT = """You are an expert sales coach. Improve the following call script to be more:
- Conversational and natural
- Well-structured with clear sections
- Question-focused to drive discovery
- Easy to follow with numbered steps
- Free of spelling and grammar errors

Keep the same general approach, but make it more effective and easier to use.
Return ONLY the improved script text, no explanations."""

DEFAULT_WHY_IT_MATTERS = (
    "This observation highlights an area for improvement in your sales conversations."
)
DEFAULT_TIPS = [
    "Review your recent calls and identify specific moments where this occurred.",
    "Practice with a colleague or manager to develop new habits.",
    "Set a specific goal for your next call related to this area.",
]
DEFAULT_PHRASES = [
    '"That\'s a great point. Can you tell me more about...?"',
    '"I want to make sure I understand your needs. What would success look like for you?"',
    '"Before I continue, what questions do you have so far?"',
]
DEFAULT_METRICS = ["Talk ratio", "Question quality", "Discovery depth"]


def improve_content(
    content: str,
    kind: str,
    client: Optional[LLMClient],
) -> str:
    """
    Rewrite a follow-up email or call script.

    Args:
        content: Draft text to improve
        kind: ``"email"`` or ``"callScript"``
        client: Model client; required

    Returns:
        Improved text, or the original content if the model returned nothing

    Raises:
        ValueError: If content is empty or kind is not supported
        LLMError: If no client is configured or the call fails
    """
    if not content or not isinstance(content, str):
        raise ValueError("Content is required.")
    if kind not in CONTENT_KINDS:
        raise ValueError('Type must be "email" or "callScript".')
    if client is None:
        raise LLMError("No LLM API key configured; cannot improve content")

    system_prompt = EMAIL_PROMPT if kind == "email" else CALL_SCRIPT_PROMPT
    try:
        improved = client.complete(
            [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": content},
            ],
            max_tokens=IMPROVE_MAX_TOKENS,
        )
    except LLMEmptyResponseError:
        return content
    return improved


def build_advice_prompt(
    seller_name: Optional[str] = None,
    metrics: Optional[Dict[str, Any]] = None,
) -> str:
    """
    Build the system prompt for coaching advice.

    Args:
        seller_name: Salesperson name
        metrics: Optional ``talk_ratio``, ``question_score`` and
            ``avg_buy_likelihood`` values (percentages)

    Returns:
        Formatted prompt string
    """
    metrics = metrics or {}
    context: List[str] = []
    if seller_name:
        context.append(f"Salesperson: {seller_name}")
    if metrics.get("talk_ratio"):
        context.append(f"Current talk ratio: {metrics['talk_ratio']}% seller")
    if metrics.get("question_score"):
        context.append(f"Question quality score: {metrics['question_score']}%")
    if metrics.get("avg_buy_likelihood"):
        context.append(f"Average buy likelihood: {metrics['avg_buy_likelihood']}%")

    context_block = "Context:\n" + "\n".join(context) if context else ""

    return f"""You are an expert B2B sales coach with 20+ years of experience training top-performing sales teams.
Your role is to provide actionable, specific coaching advice based on observed behaviors in sales calls.

{context_block}

Based on the observation provided, give coaching advice in the following JSON format:
{{
  "whyItMatters": "A 2-3 sentence explanation of why this behavior impacts sales outcomes, with specific data or research if relevant",
  "actionableTips": ["3-4 specific, practical tips the salesperson can implement immediately"],
  "examplePhrases": ["3-4 word-for-word phrases or questions they can use in their next call"],
  "relatedMetrics": ["2-3 metrics they should track to measure improvement"]
}}

Be specific, practical, and encouraging. Focus on improvement, not criticism.
Return ONLY valid JSON, no additional text."""


def fallback_advice(observation: str) -> CoachingAdvice:
    """Canned advice used when no model answer is available."""
    return CoachingAdvice(
        observation=observation,
        why_it_matters=DEFAULT_WHY_IT_MATTERS,
        actionable_tips=list(DEFAULT_TIPS),
        example_phrases=list(DEFAULT_PHRASES),
        related_metrics=list(DEFAULT_METRICS),
    )


def parse_advice_response(observation: str, response: str) -> CoachingAdvice:
    """
    Parse the model's advice JSON, filling missing fields with defaults.

    Raises:
        LLMResponseError: If the response is not a JSON object
    """
    parsed = parse_json_object(response)

    def _list(key: str, default: List[str]) -> List[str]:
        value = parsed.get(key)
        if isinstance(value, list):
            return [str(item) for item in value]
        return default

    return CoachingAdvice(
        observation=observation,
        why_it_matters=str(
            parsed.get("whyItMatters")
            or "This observation highlights an area for improvement."
        ),
        actionable_tips=_list("actionableTips", ["Practice this skill in your next call."]),
        example_phrases=_list("examplePhrases", ['"Can you tell me more about that?"']),
        related_metrics=_list("relatedMetrics", ["Talk ratio", "Question quality"]),
    )


def get_coaching_advice(
    observation: str,
    seller_name: Optional[str] = None,
    metrics: Optional[Dict[str, Any]] = None,
    client: Optional[LLMClient] = None,
) -> CoachingAdvice:
    """
    Expand a coaching observation into tips, phrases and metrics to track.

    Args:
        observation: Observation text, e.g. from CoachingMetrics.observations
        seller_name: Salesperson name
        metrics: Optional talk_ratio / question_score / avg_buy_likelihood
        client: Model client; canned advice is returned when None

    Returns:
        CoachingAdvice

    Raises:
        ValueError: If observation is empty
    """
    if not observation or not isinstance(observation, str):
        raise ValueError("Observation is required.")

    if client is None:
        return fallback_advice(observation)

    try:
        response = client.complete(
            [
                {"role": "system", "content": build_advice_prompt(seller_name, metrics)},
                {"role": "user", "content": f'Coaching observation: "{observation}"'},
            ],
            max_tokens=ADVICE_MAX_TOKENS,
        )
        return parse_advice_response(observation, response)
    except LLMError as exc:
        logger.warning("Coaching advice failed, using defaults: %s", exc)
        return fallback_advice(observation)
