"""Pydantic models for the application."""

from .analytics import (
    AnalyticsConversation,
    AnalyticsParticipant,
    AnalyticsSegment,
    AnalyticsSession,
    JobState,
    parse_conversations,
)
from .results import TextContent, ToolResult, error_result, text_result
from .transcript import (
    Phrase,
    SentimentEntry,
    Transcript,
    TranscriptBundle,
    TranscriptParticipant,
    Utterance,
)

__all__ = [
    "AnalyticsConversation",
    "AnalyticsParticipant",
    "AnalyticsSegment",
    "AnalyticsSession",
    "JobState",
    "parse_conversations",
    "TextContent",
    "ToolResult",
    "error_result",
    "text_result",
    "Phrase",
    "SentimentEntry",
    "Transcript",
    "TranscriptBundle",
    "TranscriptParticipant",
    "Utterance",
]
