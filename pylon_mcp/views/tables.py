"""Markdown table rendering for multi-record tool results.

Tables are denser than JSON for lists.  Cells are escaped so no value can
break the table structure, and long text cells are truncated first.
"""

from __future__ import annotations

from collections.abc import Sequence

from pylon_mcp.views.models import (
    AccountMinimal,
    ContactMinimal,
    IssueMinimal,
    Pagination,
    TagView,
    TeamMinimal,
)
from pylon_mcp.views.projection import truncate_text

MAX_TITLE_LENGTH = 60
MAX_NAME_LENGTH = 40
MAX_TAGS_SHOWN = 3

_EMPTY = "-"


def escape_cell(value: object | None) -> str:
    """Escape ``\\`` and ``|`` and flatten newlines so *value* fits in one cell."""
    if value is None or value == "":
        return ""
    text = str(value)
    return text.replace("\\", "\\\\").replace("|", "\\|").replace("\r\n", " ").replace("\n", " ").replace("\r", " ")


def truncate(value: str | None, max_length: int) -> str:
    if not value:
        return ""
    return truncate_text(value, max_length)


def render_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    """Render pre-escaped *rows* under *headers* as a Markdown table."""
    header_row = f"| {' | '.join(headers)} |"
    separator_row = f"|{'|'.join('---' for _ in headers)}|"
    data_rows = [f"| {' | '.join(row)} |" for row in rows]
    return "\n".join([header_row, separator_row, *data_rows])


def pagination_footer(pagination: Pagination | None) -> str:
    """Return the "more results" hint, or ``""`` on the last page."""
    if pagination is None or not pagination.has_next_page:
        return ""
    return f'\n\nMore results available. Use cursor: "{pagination.cursor}"'


# ── Entity tables ───────────────────────────────────────────────────────


def format_issues_table(issues: Sequence[IssueMinimal]) -> str:
    if not issues:
        return "No issues found."
    rows = [
        [
            escape_cell("" if issue.number is None else issue.number),
            escape_cell(truncate(issue.title, MAX_TITLE_LENGTH)),
            escape_cell(issue.state),
            escape_cell(issue.created_at.split("T")[0] if issue.created_at else _EMPTY),
            escape_cell(issue.link or _EMPTY),
        ]
        for issue in issues
    ]
    return render_table(["#", "Title", "State", "Created", "Link"], rows)


def format_accounts_table(accounts: Sequence[AccountMinimal]) -> str:
    if not accounts:
        return "No accounts found."
    rows = [
        [
            escape_cell(account.id),
            escape_cell(truncate(account.name, MAX_NAME_LENGTH)),
            escape_cell(account.primary_domain or _EMPTY),
            escape_cell(", ".join((account.tags or [])[:MAX_TAGS_SHOWN]) or _EMPTY),
        ]
        for account in accounts
    ]
    return render_table(["ID", "Name", "Domain", "Tags"], rows)


def format_contacts_table(contacts: Sequence[ContactMinimal]) -> str:
    if not contacts:
        return "No contacts found."
    rows = [
        [
            escape_cell(contact.id),
            escape_cell(truncate(contact.name, MAX_NAME_LENGTH)),
            escape_cell(contact.email or _EMPTY),
            escape_cell(contact.account_id or _EMPTY),
        ]
        for contact in contacts
    ]
    return render_table(["ID", "Name", "Email", "Account ID"], rows)


def format_tags_table(tags: Sequence[TagView]) -> str:
    if not tags:
        return "No tags found."
    rows = [
        [
            escape_cell(tag.id),
            escape_cell(tag.value),
            escape_cell(tag.object_type),
            escape_cell(tag.hex_color or _EMPTY),
        ]
        for tag in tags
    ]
    return render_table(["ID", "Value", "Type", "Color"], rows)


def _member_summary(count: int | None) -> str:
    if not count:
        return _EMPTY
    return f"{count} member{'s' if count != 1 else ''}"


def format_teams_table(teams: Sequence[TeamMinimal]) -> str:
    if not teams:
        return "No teams found."
    rows = [
        [
            escape_cell(team.id),
            escape_cell(truncate(team.name, MAX_NAME_LENGTH)),
            _member_summary(team.member_count),
        ]
        for team in teams
    ]
    return render_table(["ID", "Name", "Members"], rows)
