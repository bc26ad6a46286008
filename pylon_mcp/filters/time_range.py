"""Time-range validation for Pylon list and search requests.

Pylon rejects (or returns unbounded volumes for) windows longer than 30
days, so ranges are checked locally and fail fast.  Out-of-bounds ranges
are never clamped: the caller is told the requested span and retries.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime, timedelta
from typing import Any

from pydantic import AwareDatetime, TypeAdapter, ValidationError

from pylon_mcp.core.errors import (
    FilterValidationError,
    InvalidRangeError,
    InvalidTimestampError,
    RangeTooLargeError,
)

logger = logging.getLogger(__name__)

MAX_TIME_RANGE_DAYS = 30
MAX_TIME_RANGE = timedelta(days=MAX_TIME_RANGE_DAYS)

_SECONDS_PER_DAY = 24 * 60 * 60
_AWARE_DATETIME = TypeAdapter(AwareDatetime)


def parse_timestamp(value: Any, label: str, example: str) -> datetime:
    """Parse *value* as a timezone-aware RFC 3339 date-time.

    Raises:
        InvalidTimestampError: If *value* is not a parseable aware timestamp.
    """
    try:
        return _AWARE_DATETIME.validate_python(value)
    except ValidationError:
        raise InvalidTimestampError(
            f"Invalid {label} format: {value}. Use RFC3339 format (e.g., {example})"
        ) from None


def validate_time_range(start_time: Any, end_time: Any) -> None:
    """Check that ``start_time < end_time`` and the span is at most 30 days.

    Raises:
        InvalidTimestampError: If either bound fails to parse.
        InvalidRangeError: If the start is not before the end.
        RangeTooLargeError: If the span exceeds ``MAX_TIME_RANGE_DAYS``.
    """
    start = parse_timestamp(start_time, "start_time", "2024-01-01T00:00:00Z")
    end = parse_timestamp(end_time, "end_time", "2024-01-31T00:00:00Z")

    if start >= end:
        raise InvalidRangeError("start_time must be before end_time")

    span = end - start
    if span > MAX_TIME_RANGE:
        days = span.total_seconds() / _SECONDS_PER_DAY
        raise RangeTooLargeError(
            f"Time range cannot exceed {MAX_TIME_RANGE_DAYS} days. "
            f"Requested: {days:.1f} days. Try a shorter range like 28 days.",
            requested_days=round(days, 1),
        )


def validate_filter_time_ranges(filter_: Mapping[str, Any]) -> None:
    """Apply ``validate_time_range`` to every ``time_range`` operator in *filter_*.

    Only top-level fields whose value is an operator mapping are inspected,
    and only when the range carries both ``start`` and ``end``.

    Raises:
        FilterValidationError: The underlying failure, attributed to the field.
    """
    for field, value in filter_.items():
        if not isinstance(value, Mapping):
            continue
        time_range = value.get("time_range")
        if not isinstance(time_range, Mapping):
            continue
        start, end = time_range.get("start"), time_range.get("end")
        if not start or not end:
            continue
        try:
            validate_time_range(start, end)
        except FilterValidationError as exc:
            logger.info("Rejected time_range on %s: %s", field, exc.message)
            raise exc.for_field(field) from exc
