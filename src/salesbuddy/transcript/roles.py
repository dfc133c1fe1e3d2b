"""
Speaker role classification.

Maps a free-form speaker label to seller, customer or unknown using an
ordered keyword heuristic. The order matters: a seller-name hint beats any
title keyword, so "Alex (Director of Sales)" with hint "Alex" is the seller.
"""

import re
from enum import Enum
from typing import Iterable, Optional

from salesbuddy.config import DEFAULT_LEXICON, CoachingLexicon


class SpeakerRole(str, Enum):
    """Side of the conversation a speaker belongs to."""
    SELLER = "seller"
    CUSTOMER = "customer"
    UNKNOWN = "unknown"


_PROPER_NAME = re.compile(r"[A-Z][a-z]+")
_FIRST_TOKEN_SPLIT = re.compile(r"[\s(]")


def _matches_any(label: str, hints: Iterable[str]) -> bool:
    """Plain substring match; "ae" also fires inside "Michael"."""
    return any(hint in label for hint in hints)


def looks_like_name(speaker: str) -> bool:
    """True if the label's first token is a capitalized, letters-only word."""
    first = _FIRST_TOKEN_SPLIT.split(speaker, maxsplit=1)[0]
    return bool(first) and _PROPER_NAME.fullmatch(first) is not None


def detect_speaker_role(
    speaker: str,
    seller_name: Optional[str] = None,
    lexicon: CoachingLexicon = DEFAULT_LEXICON,
) -> SpeakerRole:
    """
    Classify a speaker label.

    Rules, first match wins:
    1. label contains the seller-name hint -> seller
    2. label contains a seller role keyword -> seller
    3. label contains a customer role/title keyword -> customer
    4. a hint was given and the label starts with a proper name -> customer
    5. otherwise -> unknown

    Args:
        speaker: Speaker label from the transcript
        seller_name: Optional name of the salesperson on the call
        lexicon: Keyword lists to match against

    Returns:
        SpeakerRole for the label

    Example:
        >>> detect_speaker_role("Jordan (CFO)")
        <SpeakerRole.CUSTOMER: 'customer'>
    """
    normalized = speaker.strip().lower()
    hint = seller_name.lower() if seller_name else ""

    if hint and hint in normalized:
        return SpeakerRole.SELLER

    if _matches_any(normalized, lexicon.seller_role_hints):
        return SpeakerRole.SELLER

    if _matches_any(normalized, lexicon.customer_role_hints):
        return SpeakerRole.CUSTOMER

    # Any other named speaker on a call with a known seller is the buyer.
    if hint and looks_like_name(speaker.strip()):
        return SpeakerRole.CUSTOMER

    return SpeakerRole.UNKNOWN
