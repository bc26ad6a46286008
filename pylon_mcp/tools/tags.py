"""Tag tool handlers."""

from typing import Any

from pylon_mcp.core.config import Settings
from pylon_mcp.models.schemas import CreateTagInput, EntityIdInput, ListInput, UpdateTagInput
from pylon_mcp.pylon_client import PylonClient
from pylon_mcp.tools.base import render_page, render_view, require_changes, validate_input
from pylon_mcp.views.tables import format_tags_table


def create_list_tags_handler(client: PylonClient, settings: Settings):
    async def pylon_list_tags(limit: int | None = None, cursor: str | None = None) -> str:
        """List all tags as a compact table."""
        validated = validate_input(ListInput, limit=limit, cursor=cursor)
        page = await client.list_tags(
            limit=validated.limit or settings.DEFAULT_LIST_LIMIT,
            cursor=validated.cursor,
        )
        return render_page(page, format_tags_table)

    return pylon_list_tags


def create_get_tag_handler(client: PylonClient, settings: Settings):
    async def pylon_get_tag(id: str) -> dict[str, Any]:
        """Get a tag by ID."""
        validated = validate_input(EntityIdInput, id=id)
        return render_view(await client.get_tag(validated.id))

    return pylon_get_tag


def create_create_tag_handler(client: PylonClient, settings: Settings):
    async def pylon_create_tag(
        value: str,
        object_type: str,
        hex_color: str | None = None,
    ) -> dict[str, Any]:
        """Create a tag for accounts, issues or contacts (hex_color like #FF5733)."""
        validated = validate_input(
            CreateTagInput,
            value=value,
            object_type=object_type,
            hex_color=hex_color,
        )
        return render_view(await client.create_tag(validated.payload()))

    return pylon_create_tag


def create_update_tag_handler(client: PylonClient, settings: Settings):
    async def pylon_update_tag(
        id: str,
        value: str | None = None,
        hex_color: str | None = None,
    ) -> dict[str, Any]:
        """Update a tag's value or color."""
        validated = validate_input(UpdateTagInput, id=id, value=value, hex_color=hex_color)
        changes = require_changes(validated.changes())
        return render_view(await client.update_tag(validated.id, changes))

    return pylon_update_tag


def create_delete_tag_handler(client: PylonClient, settings: Settings):
    async def pylon_delete_tag(id: str) -> dict[str, Any]:
        """Delete a tag."""
        validated = validate_input(EntityIdInput, id=id)
        return await client.delete_tag(validated.id)

    return pylon_delete_tag


HANDLERS = {
    "pylon_list_tags": create_list_tags_handler,
    "pylon_get_tag": create_get_tag_handler,
    "pylon_create_tag": create_create_tag_handler,
    "pylon_update_tag": create_update_tag_handler,
    "pylon_delete_tag": create_delete_tag_handler,
}
