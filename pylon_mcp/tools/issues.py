"""Issue tool handlers.

Issue bodies are often multi-kilobyte HTML email threads.  They are only
returned when asked for: as a 500-character preview via ``include_body`` on
``pylon_get_issue``, or through ``pylon_get_issue_body`` with a caller-chosen
cap of up to 10000 characters.
"""

import json
from typing import Any

from pylon_mcp.core.config import Settings
from pylon_mcp.models.schemas import (
    CreateIssueInput,
    EntityIdInput,
    GetIssueBodyInput,
    GetIssueInput,
    IssueFollowersInput,
    ListIssuesInput,
    SearchInput,
    SnoozeIssueInput,
    UpdateIssueFollowersInput,
    UpdateIssueInput,
)
from pylon_mcp.pylon_client import PylonClient
from pylon_mcp.tools.base import render_page, render_view, require_changes, validate_input
from pylon_mcp.views.projection import DEFAULT_BODY_LENGTH
from pylon_mcp.views.tables import format_issues_table, pagination_footer


def create_list_issues_handler(client: PylonClient, settings: Settings):
    async def pylon_list_issues(
        start_time: str,
        end_time: str,
        limit: int | None = None,
        cursor: str | None = None,
    ) -> str:
        """List issues created within a time range of at most 30 days (RFC3339 times)."""
        validated = validate_input(
            ListIssuesInput,
            start_time=start_time,
            end_time=end_time,
            limit=limit,
            cursor=cursor,
        )
        page = await client.list_issues(
            validated.start_time,
            validated.end_time,
            limit=validated.limit or settings.DEFAULT_ISSUE_LIMIT,
            cursor=validated.cursor,
        )
        return render_page(page, format_issues_table)

    return pylon_list_issues


def create_search_issues_handler(client: PylonClient, settings: Settings):
    async def pylon_search_issues(
        filter: dict[str, Any],
        limit: int | None = None,
        cursor: str | None = None,
    ) -> str:
        """Search issues with filters such as {"state": {"equals": "new"}}."""
        validated = validate_input(SearchInput, filter=filter, limit=limit, cursor=cursor)
        page = await client.search_issues(
            validated.filter,
            limit=validated.limit or settings.DEFAULT_ISSUE_LIMIT,
            cursor=validated.cursor,
        )
        return render_page(page, format_issues_table)

    return pylon_search_issues


def create_get_issue_handler(client: PylonClient, settings: Settings):
    async def pylon_get_issue(id: str, include_body: bool = False) -> dict[str, Any]:
        """Get issue details by ID or number. The body is omitted unless include_body is set."""
        validated = validate_input(GetIssueInput, id=id, include_body=include_body)
        issue = await client.get_issue(validated.id, include_body=validated.include_body)
        return render_view(issue)

    return pylon_get_issue


def create_get_issue_body_handler(client: PylonClient, settings: Settings):
    async def pylon_get_issue_body(id: str, max_length: int = DEFAULT_BODY_LENGTH) -> str:
        """Get the body text of an issue, stripped of HTML and capped at max_length."""
        validated = validate_input(GetIssueBodyInput, id=id, max_length=max_length)
        body = await client.get_issue_body(validated.id, max_length=validated.max_length)
        if body is None:
            return "No body content available."
        label = body.number if body.number is not None else body.id
        return (
            f"Issue #{label} body ({body.total_length} chars total, showing {len(body.text)}):"
            f"\n\n{body.text}"
        )

    return pylon_get_issue_body


def create_create_issue_handler(client: PylonClient, settings: Settings):
    async def pylon_create_issue(
        title: str,
        body_html: str,
        account_id: str | None = None,
        assignee_id: str | None = None,
        contact_id: str | None = None,
        requester_id: str | None = None,
        tags: list[str] | None = None,
        priority: str | None = None,
    ) -> dict[str, Any]:
        """Create a new issue."""
        validated = validate_input(
            CreateIssueInput,
            title=title,
            body_html=body_html,
            account_id=account_id,
            assignee_id=assignee_id,
            contact_id=contact_id,
            requester_id=requester_id,
            tags=tags,
            priority=priority,
        )
        return render_view(await client.create_issue(validated.payload()))

    return pylon_create_issue


def create_update_issue_handler(client: PylonClient, settings: Settings):
    async def pylon_update_issue(
        id: str,
        state: str | None = None,
        title: str | None = None,
        tags: list[str] | None = None,
        assignee_id: str | None = None,
        team_id: str | None = None,
        account_id: str | None = None,
        priority: str | None = None,
        customer_portal_visible: bool | None = None,
    ) -> dict[str, Any]:
        """Update an existing issue."""
        validated = validate_input(
            UpdateIssueInput,
            id=id,
            state=state,
            title=title,
            tags=tags,
            assignee_id=assignee_id,
            team_id=team_id,
            account_id=account_id,
            priority=priority,
            customer_portal_visible=customer_portal_visible,
        )
        changes = require_changes(validated.changes())
        return render_view(await client.update_issue(validated.id, changes))

    return pylon_update_issue


def create_delete_issue_handler(client: PylonClient, settings: Settings):
    async def pylon_delete_issue(id: str) -> dict[str, Any]:
        """Delete an issue."""
        validated = validate_input(EntityIdInput, id=id)
        return await client.delete_issue(validated.id)

    return pylon_delete_issue


def create_snooze_issue_handler(client: PylonClient, settings: Settings):
    async def pylon_snooze_issue(id: str, snooze_until: str) -> dict[str, Any]:
        """Snooze an issue until an RFC3339 time."""
        validated = validate_input(SnoozeIssueInput, id=id, snooze_until=snooze_until)
        return render_view(await client.snooze_issue(validated.id, validated.snooze_until))

    return pylon_snooze_issue


def create_get_issue_followers_handler(client: PylonClient, settings: Settings):
    async def pylon_get_issue_followers(
        id: str,
        limit: int | None = None,
        cursor: str | None = None,
    ) -> str:
        """Get the users and contacts following an issue."""
        validated = validate_input(IssueFollowersInput, id=id, limit=limit, cursor=cursor)
        page = await client.get_issue_followers(
            validated.id,
            limit=validated.limit or settings.DEFAULT_LIST_LIMIT,
            cursor=validated.cursor,
        )
        return json.dumps(page.data, indent=2) + pagination_footer(page.pagination)

    return pylon_get_issue_followers


def create_update_issue_followers_handler(client: PylonClient, settings: Settings):
    async def pylon_update_issue_followers(
        id: str,
        user_ids: list[str] | None = None,
        contact_ids: list[str] | None = None,
        operation: str | None = None,
    ) -> dict[str, Any]:
        """Add or remove followers on an issue (operation: add or remove, default add)."""
        validated = validate_input(
            UpdateIssueFollowersInput,
            id=id,
            user_ids=user_ids,
            contact_ids=contact_ids,
            operation=operation,
        )
        return await client.update_issue_followers(
            validated.id,
            user_ids=validated.user_ids,
            contact_ids=validated.contact_ids,
            operation=validated.operation,
        )

    return pylon_update_issue_followers


HANDLERS = {
    "pylon_list_issues": create_list_issues_handler,
    "pylon_search_issues": create_search_issues_handler,
    "pylon_get_issue": create_get_issue_handler,
    "pylon_get_issue_body": create_get_issue_body_handler,
    "pylon_create_issue": create_create_issue_handler,
    "pylon_update_issue": create_update_issue_handler,
    "pylon_delete_issue": create_delete_issue_handler,
    "pylon_snooze_issue": create_snooze_issue_handler,
    "pylon_get_issue_followers": create_get_issue_followers_handler,
    "pylon_update_issue_followers": create_update_issue_followers_handler,
}
