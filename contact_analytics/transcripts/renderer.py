"""Turn transcript bundles into an ordered, speaker-attributed utterance table."""

from typing import Iterable, Sequence

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

from ..models.transcript import TranscriptBundle, Utterance
from .participant_matcher import match_participant, speaker_label
from .sentiment import friendly_sentiment, sentiment_for, sentiment_index

tracer = trace.get_tracer("utterance-renderer")

NO_TIME = "--:--"
COLUMN_GAP = 2


def build_utterances(bundles: Iterable[TranscriptBundle]) -> list[Utterance]:
    """Build utterances bundle by bundle, transcript by transcript.

    Phrases keep their order within each transcript and transcripts are
    appended in the order received; nothing is re-sorted by timestamp.
    """
    utterances: list[Utterance] = []
    for bundle in bundles:
        for transcript in bundle.transcripts:
            sentiments = sentiment_index(transcript)
            for phrase in transcript.phrases:
                participant = match_participant(phrase, bundle.participants)
                timed = bundle.conversation_start_time is not None and phrase.start_time_ms is not None
                utterances.append(
                    Utterance(
                        speaker=speaker_label(phrase, participant),
                        text=phrase.display_text,
                        sentiment=sentiment_for(phrase, sentiments),
                        conversation_start_ms=bundle.conversation_start_time if timed else None,
                        utterance_start_ms=phrase.start_time_ms if timed else None,
                    )
                )
    return utterances


def format_time_utterance_started(utterance: Utterance, default: str = NO_TIME) -> str:
    """MM:SS elapsed since the conversation started, or ``default``."""
    elapsed_ms = utterance.relative_time_ms
    if elapsed_ms is None:
        return default
    total_seconds = max(0, elapsed_ms) // 1000
    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes:02d}:{seconds:02d}"


def _has_sentiment(utterances: Sequence[Utterance]) -> bool:
    return any(u.sentiment is not None for u in utterances)


class UtteranceRenderer:
    """Renders utterances as a borderless, column-aligned text table."""

    @staticmethod
    def rows(utterances: Sequence[Utterance]) -> list[list[str]]:
        """Header plus one row per utterance; Sentiment only when any is known."""
        with_sentiment = _has_sentiment(utterances)
        header = ["Time", "Who", *(["Sentiment"] if with_sentiment else []), "Utterance"]
        body = [
            [
                format_time_utterance_started(u),
                u.speaker,
                *([friendly_sentiment(u.sentiment)] if with_sentiment else []),
                u.text,
            ]
            for u in utterances
        ]
        return [header, *body]

    @staticmethod
    def render_table(utterances: Sequence[Utterance]) -> str:
        with tracer.start_as_current_span(
            "render_transcript_table",
            attributes={
                "transcript.utterance_count": len(utterances),
                "openinference.span.kind": "chain",
            },
        ) as span:
            # A multi-line cell spans several physical lines of its row
            rows = [[cell.splitlines() or [""] for cell in row] for row in UtteranceRenderer.rows(utterances)]
            widths = [
                max(len(line) for row in rows for line in row[i]) for i in range(len(rows[0]))
            ]

            lines = []
            for row in rows:
                for n in range(max(len(cell) for cell in row)):
                    lines.append(
                        "".join(
                            (cell[n] if n < len(cell) else "").ljust(width + COLUMN_GAP)
                            for cell, width in zip(row, widths)
                        ).rstrip()
                    )
            result = "\n".join(lines).strip()

            span.set_attribute("output.value", result)
            span.set_attribute("output.mime_type", "text/plain")
            span.set_status(Status(StatusCode.OK))
            return result

    @staticmethod
    def to_records(utterances: Sequence[Utterance]) -> list[dict]:
        """Structured form of the table for JSON consumers."""
        return [
            {
                "time": format_time_utterance_started(u),
                "relative_time_ms": u.relative_time_ms,
                "speaker": u.speaker,
                "sentiment": u.sentiment,
                "sentiment_label": friendly_sentiment(u.sentiment) or None,
                "utterance": u.text,
            }
            for u in utterances
        ]
