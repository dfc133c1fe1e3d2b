"""
Coaching metric computation.

Computes deterministic call-coaching metrics from a transcript:
- Talk ratio (seller vs customer share of spoken words)
- Question quality (share of seller questions that are open questions)
- Qualitative observations derived from the two

The metrics are pure functions of the transcript and seller-name hint, which
is why the analyzer treats them as ground truth and never lets the
generative model change the numbers.
"""

import math
from typing import Dict, List, Optional

from salesbuddy.config import DEFAULT_LEXICON, CoachingLexicon
from salesbuddy.models.entities import CoachingMetrics, QuestionScore, TalkRatio
from salesbuddy.transcript.roles import SpeakerRole, detect_speaker_role
from salesbuddy.transcript.utterances import extract_utterances

NO_LABELS_OBSERVATION = "Speaker labels were not detected; talk ratio is estimated."
HIGH_TALK_RATIO_OBSERVATION = "Seller talk ratio is high; aim for more buyer airtime."
NO_QUESTIONS_OBSERVATION = "No seller questions detected; add more discovery."

HIGH_TALK_RATIO_PCT = 70


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives.

    >>> round_half_up(12.5)
    13
    """
    return int(math.floor(value + 0.5))


def count_words(text: str) -> int:
    """Count whitespace-separated tokens."""
    return len(text.split())


def is_open_question(text: str, hints=DEFAULT_LEXICON.open_question_hints) -> bool:
    """True if the lower-cased text contains an exploratory phrase."""
    lower = text.lower()
    return any(hint in lower for hint in hints)


def compute_talk_ratio(seller_words: int, customer_words: int) -> TalkRatio:
    """Compute the seller/customer split.

    Unknown-speaker words are excluded. With no attributed words at all the
    split defaults to 50/50.
    """
    known_words = seller_words + customer_words
    if known_words > 0:
        seller_pct = round_half_up(seller_words / known_words * 100)
    else:
        seller_pct = 50
    return TalkRatio(
        seller_pct=seller_pct,
        customer_pct=100 - seller_pct,
        seller_words=seller_words,
        customer_words=customer_words,
    )


def compute_question_score(seller_questions: int, open_questions: int) -> QuestionScore:
    """Score the share of open questions; 0 when the seller asked none."""
    if seller_questions > 0:
        score = round_half_up(open_questions / seller_questions * 100)
    else:
        score = 0
    return QuestionScore(
        seller_questions=seller_questions,
        open_questions=open_questions,
        score=score,
    )


def build_observations(talk_ratio: TalkRatio, question_score: QuestionScore) -> List[str]:
    """Derive default coaching observations from the computed metrics."""
    observations: List[str] = []
    known_words = talk_ratio.seller_words + talk_ratio.customer_words
    if known_words == 0:
        observations.append(NO_LABELS_OBSERVATION)
    elif talk_ratio.seller_pct > HIGH_TALK_RATIO_PCT:
        observations.append(HIGH_TALK_RATIO_OBSERVATION)
    if question_score.seller_questions == 0:
        observations.append(NO_QUESTIONS_OBSERVATION)
    return observations


def compute_coaching_metrics(
    transcript: str,
    seller_name: Optional[str] = None,
    lexicon: CoachingLexicon = DEFAULT_LEXICON,
) -> CoachingMetrics:
    """Compute talk ratio, question score and observations for a transcript.

    Args:
        transcript: Raw transcript text with ``Speaker: text`` lines.
        seller_name: Optional salesperson name used to attribute turns.
        lexicon: Keyword lists for role detection and open questions.

    Returns:
        CoachingMetrics for the transcript.

    Example:
        >>> metrics = compute_coaching_metrics(text, seller_name="Alex")
        >>> print(metrics.talk_ratio.seller_pct)
    """
    word_counts: Dict[SpeakerRole, int] = {role: 0 for role in SpeakerRole}
    seller_questions = 0
    open_questions = 0

    for utterance in extract_utterances(transcript):
        role = detect_speaker_role(utterance.speaker, seller_name, lexicon)
        word_counts[role] += count_words(utterance.text)

        if role is SpeakerRole.SELLER and "?" in utterance.text:
            seller_questions += 1
            if is_open_question(utterance.text, lexicon.open_question_hints):
                open_questions += 1

    talk_ratio = compute_talk_ratio(
        word_counts[SpeakerRole.SELLER],
        word_counts[SpeakerRole.CUSTOMER],
    )
    question_score = compute_question_score(seller_questions, open_questions)

    return CoachingMetrics(
        talk_ratio=talk_ratio,
        question_score=question_score,
        observations=build_observations(talk_ratio, question_score),
    )
