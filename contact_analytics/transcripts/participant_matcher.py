"""Attribute transcript phrases to conversation participants.

Phrase purposes are coarse ("internal" / "external") while the participant
roster carries specific roles ("agent", "ivr", "customer", ...). A phrase is
matched in two stages: first by role class, then by whether its start time
falls inside the participant's presence interval.
"""

from enum import Enum
from typing import Sequence

from ..models.transcript import Phrase, TranscriptParticipant


class RoleClass(str, Enum):
    INTERNAL = "internal"
    EXTERNAL = "external"
    UNKNOWN = "unknown"


NON_HUMAN_PURPOSES = frozenset({"acd", "ivr", "voicemail", "fax"})
INTERNAL_PURPOSES = frozenset({"user", "agent", "internal"}) | NON_HUMAN_PURPOSES
EXTERNAL_PURPOSES = frozenset({"external", "customer"})

FRIENDLY_PURPOSE_NAMES = {
    "internal": "Agent",
    "agent": "Agent",
    "user": "Agent",
    "external": "Customer",
    "customer": "Customer",
    "acd": "ACD",
    "ivr": "IVR",
}


def role_class_of(purpose: str | None) -> RoleClass:
    """Classify a participant or phrase purpose."""
    if not purpose:
        return RoleClass.UNKNOWN
    purpose = purpose.lower()
    if purpose in INTERNAL_PURPOSES:
        return RoleClass.INTERNAL
    if purpose in EXTERNAL_PURPOSES:
        return RoleClass.EXTERNAL
    return RoleClass.UNKNOWN


def friendly_purpose_name(purpose: str | None) -> str:
    if not purpose:
        return "Unknown"
    return FRIENDLY_PURPOSE_NAMES.get(purpose.lower(), purpose)


def is_within_interval(time_ms: int | None, participant: TranscriptParticipant) -> bool:
    """Half-open containment: start_time_ms <= time_ms < end_time_ms."""
    if time_ms is None or participant.start_time_ms is None or participant.end_time_ms is None:
        return False
    return participant.start_time_ms <= time_ms < participant.end_time_ms


def match_participant(
    phrase: Phrase, participants: Sequence[TranscriptParticipant]
) -> TranscriptParticipant | None:
    """Find the participant who spoke ``phrase``, if any."""
    phrase_class = role_class_of(phrase.participant_purpose)
    for participant in participants:
        if role_class_of(participant.participant_purpose) != phrase_class:
            continue
        if is_within_interval(phrase.start_time_ms, participant):
            return participant
    return None


def speaker_label(phrase: Phrase, participant: TranscriptParticipant | None) -> str:
    """Display name for the matched participant, else for the phrase's own purpose."""
    if participant is not None and participant.participant_purpose:
        return friendly_purpose_name(participant.participant_purpose)
    return friendly_purpose_name(phrase.participant_purpose)
