"""Transcript reconstruction: fetch, attribute, join sentiment, render."""

from .fetcher import TranscriptFetcher
from .participant_matcher import (
    RoleClass,
    friendly_purpose_name,
    match_participant,
    role_class_of,
    speaker_label,
)
from .reconstructor import TranscriptReconstructor
from .renderer import (
    UtteranceRenderer,
    build_utterances,
    format_time_utterance_started,
)
from .sentiment import friendly_sentiment, sentiment_for, sentiment_index

__all__ = [
    "TranscriptFetcher",
    "RoleClass",
    "friendly_purpose_name",
    "match_participant",
    "role_class_of",
    "speaker_label",
    "TranscriptReconstructor",
    "UtteranceRenderer",
    "build_utterances",
    "format_time_utterance_started",
    "friendly_sentiment",
    "sentiment_for",
    "sentiment_index",
]
