"""Input validation and result aggregation."""

from .result_aggregator import (
    analyze_wrap_up_codes,
    breakdown_by,
    chunked,
    conversation_ids,
    count_conversations_by_queue,
    is_queue_used_in_conversation,
    sample_evenly,
)
from .time_window import TimeWindow, validate_time_window

__all__ = [
    "analyze_wrap_up_codes",
    "breakdown_by",
    "chunked",
    "conversation_ids",
    "count_conversations_by_queue",
    "is_queue_used_in_conversation",
    "sample_evenly",
    "TimeWindow",
    "validate_time_window",
]
