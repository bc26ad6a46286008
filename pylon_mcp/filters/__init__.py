"""Search filter sanitization: operator whitelist, cleaning, time-range checks."""

from pylon_mcp.filters.operators import VALID_OPERATORS, allowed_operators, is_known_field
from pylon_mcp.filters.sanitizer import clean_filter, sanitize_search_filter
from pylon_mcp.filters.time_range import (
    MAX_TIME_RANGE_DAYS,
    validate_filter_time_ranges,
    validate_time_range,
)

__all__ = [
    "MAX_TIME_RANGE_DAYS",
    "VALID_OPERATORS",
    "allowed_operators",
    "clean_filter",
    "is_known_field",
    "sanitize_search_filter",
    "validate_filter_time_ranges",
    "validate_time_range",
]
