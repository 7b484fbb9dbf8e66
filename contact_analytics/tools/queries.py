"""Builders for conversation details query bodies."""

from typing import Iterable

from ..analyzers.time_window import TimeWindow


def predicate_filter(dimension: str, values: Iterable[str], filter_type: str = "or") -> dict:
    return {
        "type": filter_type,
        "predicates": [{"dimension": dimension, "value": value} for value in values],
    }


def customer_filter() -> dict:
    return predicate_filter("purpose", ["customer"], filter_type="and")


def details_job_query(
    window: TimeWindow,
    segment_filters: list[dict],
    order: str = "asc",
) -> dict:
    """Body for an asynchronous conversation details job."""
    return {
        "interval": window.interval,
        "order": order,
        "orderBy": "conversationStart",
        "segmentFilters": segment_filters,
    }
