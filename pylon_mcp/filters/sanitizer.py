"""Filter cleaning for Pylon search requests.

``clean_filter`` never raises.  Operators a known field does not accept are
dropped rather than forwarded, which narrows the query instead of failing
it.  Unknown fields are cleaned recursively but their operators are passed
through unvalidated so new upstream fields keep working.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from pylon_mcp.filters.operators import allowed_operators
from pylon_mcp.filters.time_range import validate_filter_time_ranges

logger = logging.getLogger(__name__)


def _clean_operators(field: str, operators: Mapping[str, Any], allowed: frozenset[str]) -> dict[str, Any]:
    cleaned: dict[str, Any] = {}
    for op, operand in operators.items():
        if op not in allowed:
            logger.debug("Dropping unsupported operator %r on field %r", op, field)
            continue
        if operand is None:
            continue
        cleaned[op] = operand
    return cleaned


def clean_filter(filter_: Mapping[str, Any]) -> dict[str, Any] | None:
    """Return a copy of *filter_* holding only structurally valid clauses.

    * ``None`` values are dropped.
    * Scalars and lists are kept unchanged.
    * Operator maps on known fields keep only whitelisted operators; a field
      left with no operators is removed.
    * Mappings on unknown fields are cleaned recursively and kept only if
      something survives.

    Returns ``None`` (never ``{}``) when the whole filter reduces to nothing.
    """
    result: dict[str, Any] = {}

    for field, value in filter_.items():
        if value is None:
            continue

        if not isinstance(value, Mapping):
            result[field] = value
            continue

        allowed = allowed_operators(field)
        if allowed is not None:
            operators = _clean_operators(field, value, allowed)
            if operators:
                result[field] = operators
            else:
                logger.debug("Dropping field %r: no valid operators left", field)
        else:
            nested = clean_filter(value)
            if nested:
                result[field] = nested

    return result or None


def sanitize_search_filter(filter_: Mapping[str, Any] | None) -> dict[str, Any]:
    """Validate and clean a caller-supplied filter for a search request.

    Time ranges are checked first and fail fast; cleaning then degrades
    gracefully.  An empty result becomes ``{}``, the API's "no filter".

    Raises:
        FilterValidationError: If a ``time_range`` operator is invalid.
    """
    raw = filter_ or {}
    validate_filter_time_ranges(raw)
    cleaned = clean_filter(raw)
    logger.debug("Search filter raw: %s", json.dumps(raw, default=str))
    logger.debug("Search filter cleaned: %s", json.dumps(cleaned or {}, default=str))
    return cleaned or {}
