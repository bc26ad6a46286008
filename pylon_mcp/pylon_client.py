"""PylonClient: HTTP access to the Pylon REST API.

A single pooled ``httpx.AsyncClient`` carries the Bearer token and JSON
headers.  ``request()`` performs exactly one attempt: non-success statuses
raise ``PylonAPIError`` with the status and body text, connection failures
raise ``BackendUnavailableError`` and timeouts ``RequestTimeoutError``.
Nothing is retried; the caller sees the error and decides.

Search methods sanitize their filter before sending it, and list, search
and detail methods return projected views rather than raw records.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

import httpx

from pylon_mcp.core.config import Settings
from pylon_mcp.core.errors import BackendUnavailableError, PylonAPIError, RequestTimeoutError
from pylon_mcp.filters.sanitizer import sanitize_search_filter
from pylon_mcp.filters.time_range import parse_timestamp, validate_time_range
from pylon_mcp.views.models import (
    AccountMinimal,
    AccountStandard,
    ContactMinimal,
    ContactStandard,
    DetailLevel,
    IssueBody,
    IssueMinimal,
    IssueStandard,
    Page,
    Pagination,
    TagView,
    TeamMinimal,
    TeamStandard,
)
from pylon_mcp.views.projection import (
    DEFAULT_BODY_LENGTH,
    project,
    project_many,
    to_issue_body,
)

logger = logging.getLogger(__name__)

SERVICE_NAME = "pylon"


def _segment(value: str) -> str:
    """Quote *value* for use as a single URL path segment."""
    return quote(str(value), safe="")


def _without_none(values: Mapping[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}


def _data(payload: Any) -> Any:
    if isinstance(payload, Mapping) and "data" in payload:
        return payload["data"]
    return payload


def _pagination(payload: Any) -> Pagination:
    raw = payload.get("pagination") if isinstance(payload, Mapping) else None
    if not isinstance(raw, Mapping):
        return Pagination()
    return Pagination(cursor=raw.get("cursor"), has_next_page=bool(raw.get("has_next_page")))


class PylonClient:
    """Async client for the Pylon API.

    Args:
        settings:  Application settings (base URL, token, timeout).
        transport: Optional ``httpx`` transport; tests inject a
                   ``MockTransport`` here.
    """

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = settings.API_BASE_URL.rstrip("/")
        self._token = settings.API_TOKEN
        self._timeout = settings.REQUEST_TIMEOUT_SECONDS
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={
                    "Authorization": f"Bearer {self._token}",
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                },
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._client

    # ── Transport ───────────────────────────────────────────────────

    async def request(
        self,
        method: str,
        path: str,
        body: Mapping[str, Any] | None = None,
        *,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        """Send one request and return the decoded JSON body.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PATCH``, ``DELETE``).
            path:   API path, e.g. ``/issues/search``.
            body:   Optional JSON body.
            params: Optional query parameters; ``None`` values are omitted.

        Raises:
            PylonAPIError: On any non-2xx status.
            BackendUnavailableError: If the API cannot be reached.
            RequestTimeoutError: If the request exceeds the timeout.
        """
        query = _without_none(params or {})
        start = time.monotonic()
        try:
            response = await self._get_client().request(
                method.upper(),
                path,
                json=dict(body) if body is not None else None,
                params=query or None,
            )
        except (httpx.ConnectError, httpx.ConnectTimeout) as exc:
            logger.warning("Connection to Pylon failed for %s %s: %s", method, path, exc)
            raise BackendUnavailableError(SERVICE_NAME, "Connection failed") from None
        except httpx.TimeoutException:
            logger.warning("Pylon request timed out: %s %s", method, path)
            raise RequestTimeoutError(path, self._timeout) from None

        elapsed_ms = (time.monotonic() - start) * 1000
        logger.debug("%s %s -> %d (%.1fms)", method, path, response.status_code, elapsed_ms)

        if not response.is_success:
            logger.warning("Pylon API returned %d for %s %s", response.status_code, method, path)
            raise PylonAPIError(response.status_code, response.reason_phrase, response.text)

        if not response.content:
            return {}
        return response.json()

    async def close(self) -> None:
        """Close the pooled httpx client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    # ── Shared shapes ───────────────────────────────────────────────

    async def _list(self, path: str, kind: str, limit: int | None, cursor: str | None) -> Page:
        payload = await self.request("GET", path, params={"limit": limit, "cursor": cursor})
        return Page(data=project_many(kind, _data(payload)), pagination=_pagination(payload))

    async def _search(
        self,
        path: str,
        kind: str,
        filter_: Mapping[str, Any] | None,
        limit: int | None,
        cursor: str | None,
    ) -> Page:
        cleaned = sanitize_search_filter(filter_)
        body = _without_none({"filter": cleaned, "limit": limit, "cursor": cursor})
        payload = await self.request("POST", path, body)
        return Page(data=project_many(kind, _data(payload)), pagination=_pagination(payload))

    async def _one(
        self,
        method: str,
        path: str,
        kind: str,
        level: DetailLevel,
        body: Mapping[str, Any] | None = None,
    ) -> Any:
        payload = await self.request(method, path, body)
        return project(kind, _data(payload) or {}, level)

    # ── Organization ────────────────────────────────────────────────

    async def get_me(self) -> dict[str, Any]:
        return _data(await self.request("GET", "/me"))

    # ── Accounts ────────────────────────────────────────────────────

    async def list_accounts(self, limit: int | None = None, cursor: str | None = None) -> Page[AccountMinimal]:
        return await self._list("/accounts", "account", limit, cursor)

    async def search_accounts(
        self,
        filter_: Mapping[str, Any] | None,
        limit: int | None = None,
        cursor: str | None = None,
    ) -> Page[AccountMinimal]:
        return await self._search("/accounts/search", "account", filter_, limit, cursor)

    async def get_account(self, account_id: str) -> AccountStandard:
        return await self._one("GET", f"/accounts/{_segment(account_id)}", "account", DetailLevel.STANDARD)

    async def create_account(self, data: Mapping[str, Any]) -> AccountStandard:
        return await self._one("POST", "/accounts", "account", DetailLevel.STANDARD, data)

    async def update_account(self, account_id: str, data: Mapping[str, Any]) -> AccountStandard:
        return await self._one(
            "PATCH", f"/accounts/{_segment(account_id)}", "account", DetailLevel.STANDARD, data
        )

    async def delete_account(self, account_id: str) -> Any:
        return await self.request("DELETE", f"/accounts/{_segment(account_id)}")

    # ── Contacts ────────────────────────────────────────────────────

    async def list_contacts(self, limit: int | None = None, cursor: str | None = None) -> Page[ContactMinimal]:
        return await self._list("/contacts", "contact", limit, cursor)

    async def search_contacts(
        self,
        filter_: Mapping[str, Any] | None,
        limit: int | None = None,
        cursor: str | None = None,
    ) -> Page[ContactMinimal]:
        return await self._search("/contacts/search", "contact", filter_, limit, cursor)

    async def get_contact(self, contact_id: str) -> ContactStandard:
        return await self._one("GET", f"/contacts/{_segment(contact_id)}", "contact", DetailLevel.STANDARD)

    async def create_contact(self, data: Mapping[str, Any]) -> ContactStandard:
        return await self._one("POST", "/contacts", "contact", DetailLevel.STANDARD, data)

    async def update_contact(self, contact_id: str, data: Mapping[str, Any]) -> ContactStandard:
        return await self._one(
            "PATCH", f"/contacts/{_segment(contact_id)}", "contact", DetailLevel.STANDARD, data
        )

    async def delete_contact(self, contact_id: str) -> Any:
        return await self.request("DELETE", f"/contacts/{_segment(contact_id)}")

    # ── Issues ──────────────────────────────────────────────────────

    async def list_issues(
        self,
        start_time: str,
        end_time: str,
        limit: int | None = None,
        cursor: str | None = None,
    ) -> Page[IssueMinimal]:
        """List issues created in ``[start_time, end_time)``.

        Raises:
            FilterValidationError: If the window is invalid or over 30 days;
                raised before any request is sent.
        """
        validate_time_range(start_time, end_time)
        payload = await self.request(
            "GET",
            "/issues",
            params={"start_time": start_time, "end_time": end_time, "limit": limit, "cursor": cursor},
        )
        return Page(data=project_many("issue", _data(payload)), pagination=_pagination(payload))

    async def search_issues(
        self,
        filter_: Mapping[str, Any] | None,
        limit: int | None = None,
        cursor: str | None = None,
    ) -> Page[IssueMinimal]:
        return await self._search("/issues/search", "issue", filter_, limit, cursor)

    async def get_issue(self, issue_id: str, include_body: bool = False) -> IssueStandard:
        """Return the Standard view, or the Full view when *include_body* is set."""
        level = DetailLevel.FULL if include_body else DetailLevel.STANDARD
        return await self._one("GET", f"/issues/{_segment(issue_id)}", "issue", level)

    async def get_issue_body(self, issue_id: str, max_length: int = DEFAULT_BODY_LENGTH) -> IssueBody | None:
        payload = await self.request("GET", f"/issues/{_segment(issue_id)}")
        return to_issue_body(_data(payload) or {}, max_length)

    async def create_issue(self, data: Mapping[str, Any]) -> IssueStandard:
        return await self._one("POST", "/issues", "issue", DetailLevel.STANDARD, data)

    async def update_issue(self, issue_id: str, data: Mapping[str, Any]) -> IssueStandard:
        return await self._one("PATCH", f"/issues/{_segment(issue_id)}", "issue", DetailLevel.STANDARD, data)

    async def delete_issue(self, issue_id: str) -> Any:
        return await self.request("DELETE", f"/issues/{_segment(issue_id)}")

    async def snooze_issue(self, issue_id: str, snooze_until: str) -> IssueStandard:
        parse_timestamp(snooze_until, "snooze_until", "2024-01-01T09:00:00Z")
        return await self._one(
            "POST",
            f"/issues/{_segment(issue_id)}/snooze",
            "issue",
            DetailLevel.STANDARD,
            {"snooze_until": snooze_until},
        )

    async def get_issue_followers(
        self,
        issue_id: str,
        limit: int | None = None,
        cursor: str | None = None,
    ) -> Page[dict[str, Any]]:
        payload = await self.request(
            "GET",
            f"/issues/{_segment(issue_id)}/followers",
            params={"limit": limit, "cursor": cursor},
        )
        followers = _data(payload)
        return Page[dict[str, Any]](
            data=followers if isinstance(followers, list) else [],
            pagination=_pagination(payload),
        )

    async def update_issue_followers(
        self,
        issue_id: str,
        user_ids: list[str] | None = None,
        contact_ids: list[str] | None = None,
        operation: str | None = None,
    ) -> Any:
        body = _without_none({"user_ids": user_ids, "contact_ids": contact_ids, "operation": operation})
        return await self.request("POST", f"/issues/{_segment(issue_id)}/followers", body)

    # ── Messages ────────────────────────────────────────────────────

    async def redact_message(self, issue_id: str, message_id: str) -> Any:
        payload = await self.request(
            "POST",
            f"/issues/{_segment(issue_id)}/messages/{_segment(message_id)}/redact",
        )
        return _data(payload)

    # ── Tags ────────────────────────────────────────────────────────

    async def list_tags(self, limit: int | None = None, cursor: str | None = None) -> Page[TagView]:
        return await self._list("/tags", "tag", limit, cursor)

    async def get_tag(self, tag_id: str) -> TagView:
        return await self._one("GET", f"/tags/{_segment(tag_id)}", "tag", DetailLevel.STANDARD)

    async def create_tag(self, data: Mapping[str, Any]) -> TagView:
        return await self._one("POST", "/tags", "tag", DetailLevel.STANDARD, data)

    async def update_tag(self, tag_id: str, data: Mapping[str, Any]) -> TagView:
        return await self._one("PATCH", f"/tags/{_segment(tag_id)}", "tag", DetailLevel.STANDARD, data)

    async def delete_tag(self, tag_id: str) -> Any:
        return await self.request("DELETE", f"/tags/{_segment(tag_id)}")

    # ── Teams ───────────────────────────────────────────────────────

    async def list_teams(self, limit: int | None = None, cursor: str | None = None) -> Page[TeamMinimal]:
        return await self._list("/teams", "team", limit, cursor)

    async def get_team(self, team_id: str) -> TeamStandard:
        return await self._one("GET", f"/teams/{_segment(team_id)}", "team", DetailLevel.STANDARD)

    async def create_team(self, data: Mapping[str, Any]) -> TeamStandard:
        return await self._one("POST", "/teams", "team", DetailLevel.STANDARD, data)

    async def update_team(self, team_id: str, data: Mapping[str, Any]) -> TeamStandard:
        return await self._one("PATCH", f"/teams/{_segment(team_id)}", "team", DetailLevel.STANDARD, data)
