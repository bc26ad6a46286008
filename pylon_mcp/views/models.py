"""Projected view models for Pylon records.

Views are small, fixed-shape projections of wide API records, sized for a
context-limited caller.  Each Standard model only adds fields to its
Minimal model and each Full model only adds the body to its Standard model,
so ``Full ⊇ Standard ⊇ Minimal`` holds field for field.

Views are built fresh per response and are frozen.
"""

from __future__ import annotations

import enum
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict


class DetailLevel(str, enum.Enum):
    MINIMAL = "minimal"
    STANDARD = "standard"
    FULL = "full"


class _View(BaseModel):
    model_config = ConfigDict(frozen=True)


# ── Pagination ──────────────────────────────────────────────────────────


class Pagination(_View):
    """Opaque cursor pagination, echoed back to the API verbatim."""

    cursor: str | None = None
    has_next_page: bool = False


T = TypeVar("T")


class Page(_View, Generic[T]):
    """One page of projected records."""

    data: list[T]
    pagination: Pagination = Pagination()


# ── Issues ──────────────────────────────────────────────────────────────


class IssueMinimal(_View):
    """Issue fields for list/search results."""

    id: str
    number: int | None = None
    title: str | None = None
    state: str | None = None
    link: str | None = None
    created_at: str | None = None
    assignee_id: str | None = None
    account_id: str | None = None
    tags: list[str] | None = None


class IssueStandard(IssueMinimal):
    """Issue detail without the body."""

    requester_id: str | None = None
    team_id: str | None = None
    resolution_time: str | None = None
    latest_message_time: str | None = None
    first_response_time: str | None = None
    customer_portal_visible: bool | None = None
    source: str | None = None
    type: str | None = None


class IssueFull(IssueStandard):
    """Issue detail with a stripped, truncated body preview."""

    body_html: str = ""


class IssueBody(_View):
    """Body text of one issue plus its untruncated length."""

    id: str
    number: int | None = None
    text: str
    total_length: int


# ── Accounts ────────────────────────────────────────────────────────────


class AccountMinimal(_View):
    id: str
    name: str | None = None
    primary_domain: str | None = None
    owner_id: str | None = None
    tags: list[str] | None = None


class AccountStandard(AccountMinimal):
    domains: list[str] | None = None
    created_at: str | None = None
    type: str | None = None


# ── Contacts ────────────────────────────────────────────────────────────


class ContactMinimal(_View):
    id: str
    name: str | None = None
    email: str | None = None
    account_id: str | None = None
    portal_role: str | None = None


class ContactStandard(ContactMinimal):
    emails: list[str] | None = None
    avatar_url: str | None = None
    created_at: str | None = None


# ── Teams ───────────────────────────────────────────────────────────────


class TeamMember(_View):
    id: str
    email: str | None = None


class TeamMinimal(_View):
    """Team summary; members are counted, not listed."""

    id: str
    name: str | None = None
    member_count: int | None = None


class TeamStandard(TeamMinimal):
    users: list[TeamMember] | None = None


# ── Tags ────────────────────────────────────────────────────────────────


class TagView(_View):
    id: str
    value: str | None = None
    object_type: str | None = None
    hex_color: str | None = None
