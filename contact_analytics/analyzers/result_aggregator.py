"""Summaries computed from conversation detail rows.

Everything here is a pure function of the rows it is given. Rows that lack a
field an aggregate needs are skipped rather than treated as errors.
"""

import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterator, Sequence, TypeVar

from ..models.analytics import AnalyticsConversation

T = TypeVar("T")

SEGMENT_DIMENSIONS = ("queue_id", "media_type", "wrap_up_code")


def sample_evenly(items: Sequence[T], sample_size: int) -> list[T]:
    """Pick up to ``sample_size`` items spread evenly across ``items``.

    The selection is deterministic and keeps the original order:
    ``sample_evenly(list(range(1, 11)), 4) == [1, 3, 6, 8]``.
    """
    if len(items) <= sample_size:
        return list(items)

    step = len(items) / sample_size
    return [items[math.floor(i * step)] for i in range(sample_size)]


def chunked(items: Sequence[T], size: int) -> Iterator[list[T]]:
    """Yield consecutive slices of at most ``size`` items."""
    if size < 1:
        raise ValueError("Chunk size must be a positive integer")
    for start in range(0, len(items), size):
        yield list(items[start:start + size])


def conversation_ids(rows: Sequence[AnalyticsConversation]) -> list[str]:
    """Conversation IDs in row order; rows without an ID are skipped."""
    return [row.conversation_id for row in rows if row.conversation_id]


def is_queue_used_in_conversation(queue_id: str, row: AnalyticsConversation) -> bool:
    return any(segment.queue_id == queue_id for _, segment in row.iter_segments())


def count_conversations_by_queue(
    rows: Sequence[AnalyticsConversation], queue_ids: Sequence[str]
) -> dict[str, int]:
    """Count conversations touching each queue.

    Membership is not exclusive: a conversation routed through two of the
    queues counts once towards each of them.
    """
    counts = {queue_id: 0 for queue_id in queue_ids}
    for row in rows:
        for queue_id in counts:
            if is_queue_used_in_conversation(queue_id, row):
                counts[queue_id] += 1
    return counts


def _segment_value(session, segment, dimension: str) -> str | None:
    value = getattr(segment, dimension, None)
    if value is None and dimension == "media_type":
        value = session.media_type
    return value


@dataclass
class BreakdownEntry:
    value: str
    count: int
    examples: list[str] = field(default_factory=list)


def breakdown_by(
    rows: Sequence[AnalyticsConversation],
    dimension: str,
    example_cap: int = 3,
) -> list[BreakdownEntry]:
    """Group-count conversations by a segment dimension, largest group first."""
    if dimension not in SEGMENT_DIMENSIONS:
        raise ValueError(f"Unsupported dimension: {dimension}")

    entries: dict[str, BreakdownEntry] = {}
    for row in rows:
        if not row.conversation_id:
            continue
        values = {
            value
            for session, segment in row.iter_segments()
            if (value := _segment_value(session, segment, dimension))
        }
        for value in sorted(values):
            entry = entries.setdefault(value, BreakdownEntry(value=value, count=0))
            entry.count += 1
            if len(entry.examples) < example_cap:
                entry.examples.append(row.conversation_id)

    return sorted(entries.values(), key=lambda e: e.count, reverse=True)


@dataclass
class WrapUpCodeAnalysis:
    wrap_up_code: str
    conversation_count: int = 0
    percentage: int = 0
    queue_breakdown: Counter = field(default_factory=Counter)
    media_type_breakdown: Counter = field(default_factory=Counter)
    examples: list[str] = field(default_factory=list)


@dataclass
class WrapUpReport:
    total_conversations: int
    conversations_with_wrap_up: int
    codes: list[WrapUpCodeAnalysis]

    @property
    def coverage(self) -> int:
        if not self.total_conversations:
            return 0
        return round(self.conversations_with_wrap_up / self.total_conversations * 100)


def analyze_wrap_up_codes(
    rows: Sequence[AnalyticsConversation], example_cap: int = 5
) -> WrapUpReport:
    """Break conversations down by wrap-up code, then by queue and media type.

    A conversation is counted once per distinct wrap-up code it carries, and
    once per distinct queue / media type under that code.
    """
    analyses: dict[str, WrapUpCodeAnalysis] = {}
    total = 0
    with_wrap_up = 0

    for row in rows:
        if not row.conversation_id:
            continue
        total += 1

        queues_by_code: dict[str, set[str]] = {}
        media_by_code: dict[str, set[str]] = {}
        for session, segment in row.iter_segments():
            if not segment.wrap_up_code:
                continue
            code = segment.wrap_up_code
            queues_by_code.setdefault(code, set()).add(segment.queue_id or "Unknown")
            media_by_code.setdefault(code, set()).add(
                _segment_value(session, segment, "media_type") or "unknown"
            )

        if queues_by_code:
            with_wrap_up += 1

        for code in queues_by_code:
            analysis = analyses.setdefault(code, WrapUpCodeAnalysis(wrap_up_code=code))
            analysis.conversation_count += 1
            analysis.queue_breakdown.update(queues_by_code[code])
            analysis.media_type_breakdown.update(media_by_code[code])
            if len(analysis.examples) < example_cap:
                analysis.examples.append(row.conversation_id)

    for analysis in analyses.values():
        analysis.percentage = round(analysis.conversation_count / total * 100) if total else 0

    codes = sorted(analyses.values(), key=lambda a: a.conversation_count, reverse=True)
    return WrapUpReport(
        total_conversations=total,
        conversations_with_wrap_up=with_wrap_up,
        codes=codes,
    )
