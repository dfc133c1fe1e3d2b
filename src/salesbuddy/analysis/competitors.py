"""
Keyword-based competitor detection.

Used when no generative model is available: scans the transcript for known
competitor product names and reports each hit as a neutral mention. Matching
is plain substring search on the lower-cased transcript, in keyword-list
order.
"""

from typing import List, Optional, Sequence, Tuple

from salesbuddy.config import COMPETITOR_KEYWORDS
from salesbuddy.models.entities import CompetitorInsights, CompetitorMention, Sentiment

FALLBACK_CONTEXT = "Mentioned in transcript (fallback detection)"
FALLBACK_QUOTE = "Enable AI analysis for exact quotes"
FALLBACK_POSITIONING = "Configure an LLM API key for detailed counter-positioning suggestions"


def _display_name(keyword: str) -> str:
    return keyword[:1].upper() + keyword[1:]


def find_competitor_keywords(
    transcript: str,
    keywords: Sequence[str] = COMPETITOR_KEYWORDS,
) -> List[str]:
    """Return the keywords that occur in the transcript, in list order."""
    lower = transcript.lower()
    return [keyword for keyword in keywords if keyword in lower]


def detect_competitors(
    transcript: str,
    keywords: Sequence[str] = COMPETITOR_KEYWORDS,
) -> Tuple[Optional[List[CompetitorMention]], Optional[CompetitorInsights]]:
    """
    Build fallback competitor mentions and insights.

    Args:
        transcript: Raw transcript text
        keywords: Lower-case competitor names to look for

    Returns:
        (mentions, insights), both None when nothing matched. The first
        match is reported as the top threat.

    Example:
        >>> mentions, insights = detect_competitors("We use HubSpot today")
        >>> insights.top_threat
        'Hubspot'
    """
    found = find_competitor_keywords(transcript, keywords)
    if not found:
        return None, None

    mentions = [
        CompetitorMention(
            name=_display_name(keyword),
            context=FALLBACK_CONTEXT,
            sentiment=Sentiment.NEUTRAL,
            quote=FALLBACK_QUOTE,
        )
        for keyword in found
    ]
    insights = CompetitorInsights(
        top_threat=_display_name(found[0]),
        positioning=[FALLBACK_POSITIONING],
    )
    return mentions, insights
