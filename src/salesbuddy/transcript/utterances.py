"""
Utterance extraction from pasted call transcripts.

Splits raw transcript text into ``Speaker: text`` turns. Transcripts pasted
from meeting tools rarely carry structured metadata, so the speaker label is
recovered from a leading prefix of at most 50 characters followed by a colon.
"""

import re
from dataclasses import dataclass, asdict
from typing import Any, Dict, List

UNKNOWN_SPEAKER = "unknown"

# Label is 1-50 non-colon characters; longer prefixes are treated as prose.
SPEAKER_LINE_PATTERN = re.compile(r"^([^:]{1,50}):\s+(.+)$")

_LINE_BREAK = re.compile(r"\r?\n")


@dataclass(frozen=True)
class Utterance:
    """
    One speaker turn extracted from a transcript line.

    Attributes:
        speaker: Speaker label as written, or ``"unknown"``
        text: Spoken text with surrounding whitespace removed
    """

    speaker: str
    text: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)


def parse_line(line: str) -> Utterance:
    """Parse a single trimmed, non-empty transcript line."""
    match = SPEAKER_LINE_PATTERN.match(line)
    if not match:
        return Utterance(speaker=UNKNOWN_SPEAKER, text=line)
    return Utterance(speaker=match.group(1).strip(), text=match.group(2).strip())


def extract_utterances(transcript: str) -> List[Utterance]:
    """Split a transcript into ordered speaker turns.

    Each line is trimmed and empty lines are discarded. Lines without a
    recognizable speaker prefix are kept whole with speaker ``"unknown"``.

    Args:
        transcript: Raw transcript text.

    Returns:
        Utterances in transcript order.

    Example:
        >>> extract_utterances("Alex: Hi there\\nthanks")
        [Utterance(speaker='Alex', text='Hi there'), Utterance(speaker='unknown', text='thanks')]
    """
    utterances: List[Utterance] = []
    for raw_line in _LINE_BREAK.split(transcript):
        line = raw_line.strip()
        if not line:
            continue
        utterances.append(parse_line(line))
    return utterances
