"""Tool input Pydantic models.

One model per tool shape, with field-level constraints and null-byte
stripping plus Unicode NFC normalization on free-text fields.  Filters are
accepted as loose mappings here; their structure is sanitized by
``pylon_mcp.filters`` before they are sent.
"""

from typing import Any

from pydantic import BaseModel, Field, field_validator

from pylon_mcp.security.input_validators import sanitize_string
from pylon_mcp.views.projection import DEFAULT_BODY_LENGTH, MAX_BODY_LENGTH, MIN_BODY_LENGTH

MAX_LIST_LIMIT = 100
MAX_SEARCH_LIMIT = 1000

_PRIORITY = r"^(urgent|high|medium|low)$"
_PORTAL_ROLE = r"^(no_access|member|admin)$"
_OBJECT_TYPE = r"^(account|issue|contact)$"
_HEX_COLOR = r"^#[0-9A-Fa-f]{6}$"


class HealthResponse(BaseModel):
    """Response model for GET /health."""

    service: str
    version: str
    status: str
    uptime_seconds: float


# ── Shared sanitization validator ───────────────────────────────────────


def _sanitize_str_field(v: Any) -> Any:
    """Pydantic field_validator wrapper around sanitize_string."""
    if isinstance(v, str):
        return sanitize_string(v)
    return v


class _ToolInput(BaseModel):
    def payload(self, *, exclude: set[str] | None = None) -> dict[str, Any]:
        """Request body: every provided field except *exclude* and ``None`` values."""
        return self.model_dump(exclude=exclude, exclude_none=True)


class _UpdateInput(_ToolInput):
    id: str = Field(..., min_length=1, max_length=200)

    def changes(self) -> dict[str, Any]:
        """Fields to PATCH: everything given except the record ID."""
        return self.payload(exclude={"id"})


# ── Generic shapes ──────────────────────────────────────────────────────


class EmptyInput(_ToolInput):
    """Input for tools that take no arguments."""


class EntityIdInput(_ToolInput):
    """Input for get/delete tools addressed by a single record ID."""

    id: str = Field(..., min_length=1, max_length=200, description="The record ID")


class ListInput(_ToolInput):
    """Input for paginated list tools."""

    limit: int | None = Field(default=None, ge=1, le=MAX_LIST_LIMIT)
    cursor: str | None = Field(default=None, max_length=2000)


class SearchInput(_ToolInput):
    """Input for filtered search tools."""

    filter: dict[str, Any] = Field(default_factory=dict)
    limit: int | None = Field(default=None, ge=1, le=MAX_SEARCH_LIMIT)
    cursor: str | None = Field(default=None, max_length=2000)


# ── Issues ──────────────────────────────────────────────────────────────


class ListIssuesInput(ListInput):
    """Input for pylon_list_issues: a time window of at most 30 days."""

    start_time: str = Field(..., min_length=1, max_length=64, description="RFC3339 start time")
    end_time: str = Field(..., min_length=1, max_length=64, description="RFC3339 end time")


class GetIssueInput(_ToolInput):
    id: str = Field(..., min_length=1, max_length=200, description="The issue ID or number")
    include_body: bool = Field(default=False, description="Include a 500-char body preview")


class GetIssueBodyInput(_ToolInput):
    id: str = Field(..., min_length=1, max_length=200, description="The issue ID or number")
    max_length: int = Field(default=DEFAULT_BODY_LENGTH, ge=MIN_BODY_LENGTH, le=MAX_BODY_LENGTH)


class CreateIssueInput(_ToolInput):
    title: str = Field(..., min_length=1, max_length=1000)
    body_html: str = Field(..., min_length=1, max_length=100000)
    account_id: str | None = None
    assignee_id: str | None = None
    contact_id: str | None = None
    requester_id: str | None = None
    tags: list[str] | None = None
    priority: str | None = Field(default=None, pattern=_PRIORITY)

    @field_validator("title", "body_html", mode="before")
    @classmethod
    def sanitize_text(cls, v: str) -> str:
        return _sanitize_str_field(v)


class UpdateIssueInput(_UpdateInput):
    state: str | None = Field(default=None, max_length=100)
    title: str | None = Field(default=None, min_length=1, max_length=1000)
    tags: list[str] | None = None
    assignee_id: str | None = None
    team_id: str | None = None
    account_id: str | None = None
    priority: str | None = Field(default=None, pattern=_PRIORITY)
    customer_portal_visible: bool | None = None

    @field_validator("title", mode="before")
    @classmethod
    def sanitize_title(cls, v: str) -> str:
        return _sanitize_str_field(v)


class SnoozeIssueInput(_ToolInput):
    id: str = Field(..., min_length=1, max_length=200)
    snooze_until: str = Field(..., min_length=1, max_length=64, description="RFC3339 time")


class IssueFollowersInput(ListInput):
    id: str = Field(..., min_length=1, max_length=200)


class UpdateIssueFollowersInput(_ToolInput):
    id: str = Field(..., min_length=1, max_length=200)
    user_ids: list[str] | None = None
    contact_ids: list[str] | None = None
    operation: str | None = Field(default=None, pattern=r"^(add|remove)$")


# ── Messages ────────────────────────────────────────────────────────────


class RedactMessageInput(_ToolInput):
    issue_id: str = Field(..., min_length=1, max_length=200)
    message_id: str = Field(..., min_length=1, max_length=200)


# ── Accounts ────────────────────────────────────────────────────────────


class CreateAccountInput(_ToolInput):
    name: str = Field(..., min_length=1, max_length=500)
    domains: list[str] | None = None
    primary_domain: str | None = Field(default=None, max_length=500)
    logo_url: str | None = Field(default=None, max_length=2000)
    owner_id: str | None = None
    tags: list[str] | None = None

    @field_validator("name", mode="before")
    @classmethod
    def sanitize_name(cls, v: str) -> str:
        return _sanitize_str_field(v)


class UpdateAccountInput(_UpdateInput):
    name: str | None = Field(default=None, min_length=1, max_length=500)
    domains: list[str] | None = None
    primary_domain: str | None = Field(default=None, max_length=500)
    logo_url: str | None = Field(default=None, max_length=2000)
    owner_id: str | None = None
    tags: list[str] | None = None

    @field_validator("name", mode="before")
    @classmethod
    def sanitize_name(cls, v: str) -> str:
        return _sanitize_str_field(v)


# ── Contacts ────────────────────────────────────────────────────────────


class CreateContactInput(_ToolInput):
    name: str = Field(..., min_length=1, max_length=500)
    email: str | None = Field(default=None, max_length=320)
    account_id: str | None = None
    avatar_url: str | None = Field(default=None, max_length=2000)
    portal_role: str | None = Field(default=None, pattern=_PORTAL_ROLE)

    @field_validator("name", mode="before")
    @classmethod
    def sanitize_name(cls, v: str) -> str:
        return _sanitize_str_field(v)


class UpdateContactInput(_UpdateInput):
    name: str | None = Field(default=None, min_length=1, max_length=500)
    email: str | None = Field(default=None, max_length=320)
    account_id: str | None = None
    avatar_url: str | None = Field(default=None, max_length=2000)
    portal_role: str | None = Field(default=None, pattern=_PORTAL_ROLE)

    @field_validator("name", mode="before")
    @classmethod
    def sanitize_name(cls, v: str) -> str:
        return _sanitize_str_field(v)


# ── Tags ────────────────────────────────────────────────────────────────


class CreateTagInput(_ToolInput):
    value: str = Field(..., min_length=1, max_length=200)
    object_type: str = Field(..., pattern=_OBJECT_TYPE)
    hex_color: str | None = Field(default=None, pattern=_HEX_COLOR)

    @field_validator("value", mode="before")
    @classmethod
    def sanitize_value(cls, v: str) -> str:
        return _sanitize_str_field(v)


class UpdateTagInput(_UpdateInput):
    value: str | None = Field(default=None, min_length=1, max_length=200)
    hex_color: str | None = Field(default=None, pattern=_HEX_COLOR)

    @field_validator("value", mode="before")
    @classmethod
    def sanitize_value(cls, v: str) -> str:
        return _sanitize_str_field(v)


# ── Teams ───────────────────────────────────────────────────────────────


class CreateTeamInput(_ToolInput):
    name: str | None = Field(default=None, min_length=1, max_length=500)
    user_ids: list[str] | None = None


class UpdateTeamInput(_UpdateInput):
    name: str | None = Field(default=None, min_length=1, max_length=500)
    user_ids: list[str] | None = None
