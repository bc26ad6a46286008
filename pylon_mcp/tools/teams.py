"""Team tool handlers.

Team lists show a member count; the member list itself is only part of
the detail view.
"""

from typing import Any

from pylon_mcp.core.config import Settings
from pylon_mcp.models.schemas import CreateTeamInput, EntityIdInput, ListInput, UpdateTeamInput
from pylon_mcp.pylon_client import PylonClient
from pylon_mcp.tools.base import render_page, render_view, require_changes, validate_input
from pylon_mcp.views.tables import format_teams_table


def create_list_teams_handler(client: PylonClient, settings: Settings):
    async def pylon_list_teams(limit: int | None = None, cursor: str | None = None) -> str:
        """List all teams as a compact table."""
        validated = validate_input(ListInput, limit=limit, cursor=cursor)
        page = await client.list_teams(
            limit=validated.limit or settings.DEFAULT_LIST_LIMIT,
            cursor=validated.cursor,
        )
        return render_page(page, format_teams_table)

    return pylon_list_teams


def create_get_team_handler(client: PylonClient, settings: Settings):
    async def pylon_get_team(id: str) -> dict[str, Any]:
        """Get a team and its members by ID."""
        validated = validate_input(EntityIdInput, id=id)
        return render_view(await client.get_team(validated.id))

    return pylon_get_team


def create_create_team_handler(client: PylonClient, settings: Settings):
    async def pylon_create_team(
        name: str | None = None,
        user_ids: list[str] | None = None,
    ) -> dict[str, Any]:
        """Create a new team."""
        validated = validate_input(CreateTeamInput, name=name, user_ids=user_ids)
        return render_view(await client.create_team(validated.payload()))

    return pylon_create_team


def create_update_team_handler(client: PylonClient, settings: Settings):
    async def pylon_update_team(
        id: str,
        name: str | None = None,
        user_ids: list[str] | None = None,
    ) -> dict[str, Any]:
        """Update a team's name or members."""
        validated = validate_input(UpdateTeamInput, id=id, name=name, user_ids=user_ids)
        changes = require_changes(validated.changes())
        return render_view(await client.update_team(validated.id, changes))

    return pylon_update_team


HANDLERS = {
    "pylon_list_teams": create_list_teams_handler,
    "pylon_get_team": create_get_team_handler,
    "pylon_create_team": create_create_team_handler,
    "pylon_update_team": create_update_team_handler,
}
