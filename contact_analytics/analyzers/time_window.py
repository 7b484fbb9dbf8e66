"""Validation of caller-supplied start/end instants."""

from dataclasses import dataclass
from datetime import datetime, timezone

from ..errors import TimeWindowError


@dataclass(frozen=True)
class TimeWindow:
    """A validated, UTC, non-empty interval whose end is not in the future."""

    start: datetime
    end: datetime

    @property
    def interval(self) -> str:
        """The window as an ISO-8601 interval string ("start/end")."""
        return format_interval(self.start, self.end)

    def date_range(self) -> str:
        return f"{self.start.date().isoformat()} to {self.end.date().isoformat()}"


def format_interval(start: datetime, end: datetime) -> str:
    """ISO-8601 interval with millisecond UTC instants, as the analytics APIs expect."""
    return f"{_isoformat(start)}/{_isoformat(end)}"


def _isoformat(value: datetime) -> str:
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_instant(value: str) -> datetime | None:
    """Parse an ISO-8601 instant; naive values and a trailing "Z" mean UTC."""
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def validate_time_window(start: str, end: str, now: datetime | None = None) -> TimeWindow:
    """
    Validate a start/end pair and clamp a future end to now.

    Args:
        start: Start instant in ISO-8601 format
        end: End instant in ISO-8601 format
        now: Current instant (defaults to the system clock)

    Returns:
        The validated TimeWindow

    Raises:
        TimeWindowError: InvalidStart, InvalidEnd, StartNotBeforeEnd or
            StartInFuture, checked in that order
    """
    now = now or datetime.now(timezone.utc)

    start_at = parse_instant(start)
    if start_at is None:
        raise TimeWindowError(TimeWindowError.INVALID_START)

    end_at = parse_instant(end)
    if end_at is None:
        raise TimeWindowError(TimeWindowError.INVALID_END)

    if start_at >= end_at:
        raise TimeWindowError(TimeWindowError.START_NOT_BEFORE_END)

    if start_at > now:
        raise TimeWindowError(TimeWindowError.START_IN_FUTURE)

    if end_at > now:
        end_at = now

    # start == now with a future end leaves nothing to query
    if start_at >= end_at:
        raise TimeWindowError(TimeWindowError.START_NOT_BEFORE_END)

    return TimeWindow(start=start_at, end=end_at)
