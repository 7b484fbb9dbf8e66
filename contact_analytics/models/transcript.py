"""Pydantic models for the Speech and Text Analytics transcript payload.

One ``TranscriptBundle`` is downloaded per recording session (communication)
of a conversation. Only the fields used for reconstruction are declared.
"""

from dataclasses import dataclass

from pydantic import Field

from .base import GenesysModel


class Phrase(GenesysModel):
    """One recognised utterance span within a transcript."""

    phrase_index: int | None = None
    participant_purpose: str | None = None
    text: str | None = None
    decorated_text: str | None = None
    start_time_ms: int | None = None

    @property
    def display_text(self) -> str:
        if self.decorated_text is not None:
            return self.decorated_text
        return self.text or ""


class SentimentEntry(GenesysModel):
    phrase_index: int | None = None
    sentiment: int | None = None


class TranscriptAnalytics(GenesysModel):
    sentiment: list[SentimentEntry] = Field(default_factory=list)


class Transcript(GenesysModel):
    transcript_id: str | None = None
    language: str | None = None
    phrases: list[Phrase] = Field(default_factory=list)
    analytics: TranscriptAnalytics | None = None


class TranscriptParticipant(GenesysModel):
    """A party's presence interval [start_time_ms, end_time_ms) with a role."""

    participant_purpose: str | None = None
    user_id: str | None = None
    queue_id: str | None = None
    start_time_ms: int | None = None
    end_time_ms: int | None = None


class TranscriptBundle(GenesysModel):
    """Transcript collection for a single communication of a conversation."""

    conversation_id: str | None = None
    communication_id: str | None = None
    media_type: str | None = None
    conversation_start_time: int | None = None
    participants: list[TranscriptParticipant] = Field(default_factory=list)
    transcripts: list[Transcript] = Field(default_factory=list)


@dataclass
class Utterance:
    """A speaker-attributed phrase, built fresh for each render."""

    speaker: str
    text: str
    sentiment: int | None = None
    conversation_start_ms: int | None = None
    utterance_start_ms: int | None = None

    @property
    def relative_time_ms(self) -> int | None:
        if self.conversation_start_ms is None or self.utterance_start_ms is None:
            return None
        return self.utterance_start_ms - self.conversation_start_ms
