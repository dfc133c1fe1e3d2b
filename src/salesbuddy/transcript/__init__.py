"""
Transcript parsing: speaker turns and speaker roles.
"""

from salesbuddy.transcript.utterances import Utterance, extract_utterances
from salesbuddy.transcript.roles import SpeakerRole, detect_speaker_role

__all__ = ["Utterance", "extract_utterances", "SpeakerRole", "detect_speaker_role"]
