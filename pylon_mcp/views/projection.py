"""Projection of raw Pylon records into fixed-shape views.

The API sometimes expands relations (``{"account": {"id": ...}}``) and
sometimes returns flat foreign keys (``{"account_id": ...}``) depending on
the request.  ``extract_related_id`` normalizes both forms so views always
carry a flat identifier.

Body content is never returned implicitly: only the Full issue view and the
dedicated body tool include it, and both strip markup and truncate.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel

from pylon_mcp.views.models import (
    AccountMinimal,
    AccountStandard,
    ContactMinimal,
    ContactStandard,
    DetailLevel,
    IssueBody,
    IssueFull,
    IssueMinimal,
    IssueStandard,
    TagView,
    TeamMember,
    TeamMinimal,
    TeamStandard,
)

RawRecord = Mapping[str, Any]

MAX_BODY_PREVIEW_LENGTH = 500
DEFAULT_BODY_LENGTH = 2000
MIN_BODY_LENGTH = 100
MAX_BODY_LENGTH = 10000

ELLIPSIS = "..."

_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")


# ── Text helpers ────────────────────────────────────────────────────────


def truncate_text(text: str, max_length: int) -> str:
    """Cut *text* to at most *max_length* characters, ending in ``...`` if cut."""
    if len(text) <= max_length:
        return text
    if max_length < len(ELLIPSIS):
        return text[:max_length]
    return text[: max_length - len(ELLIPSIS)] + ELLIPSIS


def strip_html(html: str | None) -> str:
    """Remove tags and collapse whitespace runs to single spaces."""
    if not html:
        return ""
    return _WHITESPACE_RE.sub(" ", _TAG_RE.sub(" ", html)).strip()


def strip_html_and_truncate(html: str | None, max_length: int) -> str:
    """Strip markup from *html* and bound the result to *max_length* chars."""
    return truncate_text(strip_html(html), max_length)


# ── Field helpers ───────────────────────────────────────────────────────


def extract_related_id(raw: RawRecord, relation: str, field: str | None = None) -> str | None:
    """Return the identifier of *relation*, whether flat or expanded.

    The flat field (``<relation>_id`` unless *field* is given) wins when it
    is a string; otherwise the ``id`` of an expanded ``raw[relation]``
    object is used.
    """
    flat = raw.get(field or f"{relation}_id")
    if isinstance(flat, str):
        return flat
    related = raw.get(relation)
    if isinstance(related, Mapping):
        nested = related.get("id")
        if nested is not None:
            return str(nested)
    return None


def _record_id(raw: RawRecord) -> str:
    value = raw.get("id")
    return "" if value is None else str(value)


def _str_or_none(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def _int_or_none(value: Any) -> int | None:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return None


def _bool_or_none(value: Any) -> bool | None:
    return value if isinstance(value, bool) else None


def _str_list(value: Any) -> list[str] | None:
    if not isinstance(value, list):
        return None
    return [text for text in map(_str_or_none, value) if text is not None]


# ── Issues ──────────────────────────────────────────────────────────────


def _issue_minimal_fields(raw: RawRecord) -> dict[str, Any]:
    return {
        "id": _record_id(raw),
        "number": _int_or_none(raw.get("number")),
        "title": _str_or_none(raw.get("title")),
        "state": _str_or_none(raw.get("state")),
        "link": _str_or_none(raw.get("link")),
        "created_at": _str_or_none(raw.get("created_at")),
        "assignee_id": extract_related_id(raw, "assignee"),
        "account_id": extract_related_id(raw, "account"),
        "tags": _str_list(raw.get("tags")),
    }


def _issue_standard_fields(raw: RawRecord) -> dict[str, Any]:
    return {
        **_issue_minimal_fields(raw),
        "requester_id": extract_related_id(raw, "requester"),
        "team_id": extract_related_id(raw, "team"),
        "resolution_time": _str_or_none(raw.get("resolution_time")),
        "latest_message_time": _str_or_none(raw.get("latest_message_time")),
        "first_response_time": _str_or_none(raw.get("first_response_time")),
        "customer_portal_visible": _bool_or_none(raw.get("customer_portal_visible")),
        "source": _str_or_none(raw.get("source")),
        "type": _str_or_none(raw.get("type")),
    }


def to_issue_minimal(raw: RawRecord) -> IssueMinimal:
    return IssueMinimal(**_issue_minimal_fields(raw))


def to_issue_standard(raw: RawRecord) -> IssueStandard:
    return IssueStandard(**_issue_standard_fields(raw))


def to_issue_full(raw: RawRecord) -> IssueFull:
    """Standard issue view plus a body preview capped at 500 characters."""
    return IssueFull(
        **_issue_standard_fields(raw),
        body_html=strip_html_and_truncate(_str_or_none(raw.get("body_html")), MAX_BODY_PREVIEW_LENGTH),
    )


def to_issue_body(raw: RawRecord, max_length: int = DEFAULT_BODY_LENGTH) -> IssueBody | None:
    """Return the stripped body bounded to *max_length*, or ``None`` if empty.

    ``total_length`` is the stripped length before truncation so the caller
    can decide whether to ask for more.
    """
    text = strip_html(_str_or_none(raw.get("body_html")))
    if not text:
        return None
    return IssueBody(
        id=_record_id(raw),
        number=_int_or_none(raw.get("number")),
        text=truncate_text(text, max_length),
        total_length=len(text),
    )


# ── Accounts ────────────────────────────────────────────────────────────


def _account_minimal_fields(raw: RawRecord) -> dict[str, Any]:
    return {
        "id": _record_id(raw),
        "name": _str_or_none(raw.get("name")),
        "primary_domain": _str_or_none(raw.get("primary_domain")),
        "owner_id": extract_related_id(raw, "owner"),
        "tags": _str_list(raw.get("tags")),
    }


def to_account_minimal(raw: RawRecord) -> AccountMinimal:
    return AccountMinimal(**_account_minimal_fields(raw))


def to_account_standard(raw: RawRecord) -> AccountStandard:
    return AccountStandard(
        **_account_minimal_fields(raw),
        domains=_str_list(raw.get("domains")),
        created_at=_str_or_none(raw.get("created_at")),
        type=_str_or_none(raw.get("type")),
    )


# ── Contacts ────────────────────────────────────────────────────────────


def _contact_minimal_fields(raw: RawRecord) -> dict[str, Any]:
    return {
        "id": _record_id(raw),
        "name": _str_or_none(raw.get("name")),
        "email": _str_or_none(raw.get("email")),
        "account_id": extract_related_id(raw, "account"),
        "portal_role": _str_or_none(raw.get("portal_role")),
    }


def to_contact_minimal(raw: RawRecord) -> ContactMinimal:
    return ContactMinimal(**_contact_minimal_fields(raw))


def to_contact_standard(raw: RawRecord) -> ContactStandard:
    return ContactStandard(
        **_contact_minimal_fields(raw),
        emails=_str_list(raw.get("emails")),
        avatar_url=_str_or_none(raw.get("avatar_url")),
        created_at=_str_or_none(raw.get("created_at")),
    )


# ── Teams ───────────────────────────────────────────────────────────────


def _team_users(raw: RawRecord) -> list[TeamMember] | None:
    users = raw.get("users")
    if not isinstance(users, list):
        return None
    return [
        TeamMember(id=str(user["id"]), email=_str_or_none(user.get("email")))
        for user in users
        if isinstance(user, Mapping) and user.get("id") is not None
    ]


def _team_minimal_fields(raw: RawRecord) -> dict[str, Any]:
    users = raw.get("users")
    return {
        "id": _record_id(raw),
        "name": _str_or_none(raw.get("name")),
        "member_count": len(users) if isinstance(users, list) else None,
    }


def to_team_minimal(raw: RawRecord) -> TeamMinimal:
    return TeamMinimal(**_team_minimal_fields(raw))


def to_team_standard(raw: RawRecord) -> TeamStandard:
    return TeamStandard(**_team_minimal_fields(raw), users=_team_users(raw))


# ── Tags ────────────────────────────────────────────────────────────────


def to_tag(raw: RawRecord) -> TagView:
    return TagView(
        id=_record_id(raw),
        value=_str_or_none(raw.get("value")),
        object_type=_str_or_none(raw.get("object_type")),
        hex_color=_str_or_none(raw.get("hex_color")),
    )


# ── Dispatch ────────────────────────────────────────────────────────────

# kind → (minimal, standard, full).  Only issues carry a body, so the
# other kinds top out at their Standard view.
_PROJECTORS: dict[str, tuple[Callable[[RawRecord], BaseModel], ...]] = {
    "issue": (to_issue_minimal, to_issue_standard, to_issue_full),
    "account": (to_account_minimal, to_account_standard, to_account_standard),
    "contact": (to_contact_minimal, to_contact_standard, to_contact_standard),
    "team": (to_team_minimal, to_team_standard, to_team_standard),
    "tag": (to_tag, to_tag, to_tag),
}

_LEVEL_INDEX = {
    DetailLevel.MINIMAL: 0,
    DetailLevel.STANDARD: 1,
    DetailLevel.FULL: 2,
}


def project(kind: str, raw: RawRecord, level: DetailLevel = DetailLevel.MINIMAL) -> BaseModel:
    """Project *raw* into the *level* view for entity *kind*.

    Raises:
        ValueError: If *kind* is not a known entity kind.
    """
    projectors = _PROJECTORS.get(kind)
    if projectors is None:
        raise ValueError(f"Unknown entity kind '{kind}'. Valid kinds: {sorted(_PROJECTORS)}")
    return projectors[_LEVEL_INDEX[DetailLevel(level)]](raw)


def project_many(kind: str, records: Any, level: DetailLevel = DetailLevel.MINIMAL) -> list[Any]:
    """Project every mapping in *records*; anything else yields an empty list."""
    if not isinstance(records, list):
        return []
    return [project(kind, raw, level) for raw in records if isinstance(raw, Mapping)]
