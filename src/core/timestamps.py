"""Conversion of user-supplied dates into store timestamps.

Stored ``reported_date`` values are epoch milliseconds; CLI flags and plan
files carry ISO dates or datetimes, read as UTC when no offset is given.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

from core.errors import SweepConfigError


def to_epoch_ms(value: str | date | datetime) -> int:
    """Convert an ISO date, datetime, or date object to epoch milliseconds.

    Args:
        value: ``YYYY-MM-DD``, an ISO datetime string, or a date/datetime.

    Returns:
        Milliseconds since the Unix epoch.

    Raises:
        SweepConfigError: If the string is not an ISO date or datetime.
    """
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        moment = datetime(value.year, value.month, value.day)
    else:
        try:
            moment = datetime.fromisoformat(value.strip())
        except ValueError as error:
            raise SweepConfigError(
                f"Invalid date '{value}': use YYYY-MM-DD or an ISO 8601 datetime."
            ) from error
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return int(moment.timestamp() * 1000)


def date_range_ms(
    start: str | date | datetime | None,
    end: str | date | datetime | None,
) -> tuple[int | None, int | None]:
    """Convert an optional ``[start, end)`` pair, requiring both or neither.

    Raises:
        SweepConfigError: If only one bound is given or the range is empty.
    """
    if start is None and end is None:
        return None, None
    if start is None or end is None:
        raise SweepConfigError("Date range needs both a start and an end bound.")
    return validate_range_ms(to_epoch_ms(start), to_epoch_ms(end))


def validate_range_ms(start_ms: int | None, end_ms: int | None) -> tuple[int | None, int | None]:
    """Check an epoch-millisecond ``[start, end)`` pair, requiring both or neither.

    Raises:
        SweepConfigError: If only one bound is given or the range is empty.
    """
    if start_ms is None and end_ms is None:
        return None, None
    if start_ms is None or end_ms is None:
        raise SweepConfigError("Date range needs both a start and an end bound.")
    if end_ms <= start_ms:
        raise SweepConfigError(f"Date range end {end_ms} must be after start {start_ms}.")
    return start_ms, end_ms
