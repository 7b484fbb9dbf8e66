"""Text helpers shared by the tool responses."""

import math
import re
from datetime import datetime

from ..analyzers.time_window import parse_instant


def pagination_section(
    total_label: str,
    page_size: int | None = None,
    page_number: int | None = None,
    total_hits: int | None = None,
    page_count: int | None = None,
) -> list[str]:
    """Lines describing where a page sits within a paged result set."""
    if page_count is not None:
        total_pages = str(page_count)
    elif page_size:
        total_pages = str(max(1, math.ceil((total_hits or 0) / page_size)))
    else:
        total_pages = "N/A"

    return [
        "--- Pagination Info ---",
        f"Page Number: {page_number or 'N/A'}",
        f"Page Size: {page_size or 'N/A'}",
        f"Total Pages: {total_pages}",
        f"{total_label}: {total_hits or 'N/A'}",
    ]


def interpret_sentiment(score: float | None) -> str:
    """Label a sentiment score on the -100..100 scale."""
    if score is None:
        return "Unknown"
    if score > 55:
        return "Positive"
    if 20 <= score <= 55:
        return "Slightly Positive"
    if -20 < score < 20:
        return "Neutral"
    if -55 <= score <= -20:
        return "Slightly Negative"
    return "Negative"


def mos_quality_label(mos: float) -> str:
    if mos < 3.5:
        return "Poor"
    if mos < 4.3:
        return "Acceptable"
    return "Excellent"


def normalise_phone_number(phone_number: str) -> str:
    """Strip everything but digits, as the ANI dimension stores them."""
    return re.sub(r"\D", "", phone_number)


_DURATION_UNITS = (
    # (upper bound in minutes, unit, minutes per unit)
    (60, "minute", 1),
    (60 * 24, "hour", 60),
    (60 * 24 * 30, "day", 60 * 24),
    (60 * 24 * 365, "month", 60 * 24 * 30),
)


def _plural(value: int, unit: str) -> str:
    return f"{value} {unit}" if value == 1 else f"{value} {unit}s"


def format_duration(start: str | datetime | None, end: str | datetime | None) -> str | None:
    """Describe the distance between two instants in a single unit, e.g. "5 minutes"."""
    start_at = parse_instant(start) if isinstance(start, str) else start
    end_at = parse_instant(end) if isinstance(end, str) else end
    if start_at is None or end_at is None:
        return None

    seconds = abs((end_at - start_at).total_seconds())
    minutes = seconds / 60
    if minutes < 1:
        return _plural(round(seconds), "second")

    for bound, unit, per_unit in _DURATION_UNITS:
        if round(minutes) < bound:
            return _plural(round(minutes / per_unit), unit)

    return _plural(round(minutes / (60 * 24 * 365)), "year")
