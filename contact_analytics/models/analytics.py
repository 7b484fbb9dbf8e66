"""Pydantic models for analytics jobs and conversation detail rows."""

from enum import Enum

from pydantic import Field, ValidationError

from ..errors import DataIncompleteError
from .base import GenesysModel


class JobState(str, Enum):
    """State reported for an asynchronous conversation details job."""

    SUBMITTED = "SUBMITTED"
    QUEUED = "QUEUED"
    PENDING = "PENDING"
    RUNNING = "RUNNING"
    FULFILLED = "FULFILLED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"
    EXPIRED = "EXPIRED"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def parse(cls, value: str | None) -> "JobState":
        """Map a raw state string to a JobState; unrecognised values are UNKNOWN."""
        if not value:
            return cls.UNKNOWN
        try:
            return cls(value.upper())
        except ValueError:
            return cls.UNKNOWN

    @property
    def is_pending(self) -> bool:
        return self in _PENDING_STATES

    @property
    def failure_message(self) -> str | None:
        return _FAILURE_MESSAGES.get(self)


_PENDING_STATES = frozenset(
    {JobState.SUBMITTED, JobState.QUEUED, JobState.PENDING, JobState.RUNNING}
)

_FAILURE_MESSAGES = {
    JobState.FAILED: "Analytics job failed.",
    JobState.CANCELLED: "Analytics job was cancelled.",
    JobState.EXPIRED: "Analytics job results have expired.",
    JobState.UNKNOWN: "Analytics job returned an unknown or undefined state.",
}


class AnalyticsSegment(GenesysModel):
    """Finest-grained routing unit: one queue / media type / wrap-up assignment."""

    segment_type: str | None = None
    queue_id: str | None = None
    wrap_up_code: str | None = None
    media_type: str | None = None


class AnalyticsSession(GenesysModel):
    session_id: str | None = None
    media_type: str | None = None
    segments: list[AnalyticsSegment] = Field(default_factory=list)


class AnalyticsParticipant(GenesysModel):
    participant_id: str | None = None
    purpose: str | None = None
    sessions: list[AnalyticsSession] = Field(default_factory=list)


class AnalyticsConversation(GenesysModel):
    """One result row of a conversation details query or job."""

    conversation_id: str | None = None
    conversation_start: str | None = None
    conversation_end: str | None = None
    media_stats_min_conversation_mos: float | None = None
    participants: list[AnalyticsParticipant] = Field(default_factory=list)

    def iter_segments(self):
        """Yield (session, segment) pairs across every participant."""
        for participant in self.participants:
            for session in participant.sessions:
                for segment in session.segments:
                    yield session, segment


def parse_conversations(payload: dict | None) -> list[AnalyticsConversation]:
    """Parse the ``conversations`` rows of a details response.

    Raises:
        DataIncompleteError: If a row does not have the expected shape
    """
    rows = (payload or {}).get("conversations") or []
    try:
        return [AnalyticsConversation.model_validate(row) for row in rows]
    except ValidationError as e:
        raise DataIncompleteError(
            "Conversation details returned by Genesys Cloud were not in the expected format."
        ) from e
