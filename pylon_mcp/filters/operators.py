"""Per-field operator whitelist for Pylon search filters.

The LLM caller sometimes hallucinates operators (``gte`` instead of
``time_is_after``), so only the operators listed here are forwarded for
known fields.  The table is read-only after import.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

_TIME_OPERATORS = frozenset({"time_is_after", "time_is_before", "time_range"})
_STRING_OPERATORS = frozenset({"string_contains", "string_does_not_contain"})
_ID_OPERATORS = frozenset({"equals", "in", "not_in"})
_OPTIONAL_ID_OPERATORS = _ID_OPERATORS | {"is_set", "is_unset"}
_ENUM_OPERATORS = frozenset({"equals", "in", "not_in"})
_TAG_OPERATORS = frozenset({"contains", "does_not_contain", "in", "not_in"})

VALID_OPERATORS: Mapping[str, frozenset[str]] = MappingProxyType({
    # Time fields
    "created_at": _TIME_OPERATORS,
    "resolved_at": _TIME_OPERATORS,
    "latest_message_activity_at": _TIME_OPERATORS,
    # String search (body_html is not searchable upstream)
    "title": _STRING_OPERATORS,
    # ID fields
    "id": _ID_OPERATORS,
    "account_id": _OPTIONAL_ID_OPERATORS,
    "requester_id": _OPTIONAL_ID_OPERATORS,
    "assignee_id": _OPTIONAL_ID_OPERATORS,
    "team_id": _OPTIONAL_ID_OPERATORS,
    "ticket_form_id": _OPTIONAL_ID_OPERATORS,
    "follower_user_id": _ID_OPERATORS,
    "follower_contact_id": _ID_OPERATORS,
    # Enum fields
    "state": _ENUM_OPERATORS,
    "issue_type": _ENUM_OPERATORS,
    # Tags
    "tags": _TAG_OPERATORS,
    # Account fields
    "domains": frozenset({"contains", "does_not_contain"}),
    "name": frozenset({"equals", "string_contains"}),
    "external_ids": _OPTIONAL_ID_OPERATORS,
    # Contact fields
    "email": frozenset({"equals", "string_contains", "in", "not_in"}),
})


def allowed_operators(field: str) -> frozenset[str] | None:
    """Return the operators *field* accepts, or ``None`` for unknown fields."""
    return VALID_OPERATORS.get(field)


def is_known_field(field: str) -> bool:
    return field in VALID_OPERATORS
