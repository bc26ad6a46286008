"""Contact tool handlers."""

from typing import Any

from pylon_mcp.core.config import Settings
from pylon_mcp.models.schemas import (
    CreateContactInput,
    EntityIdInput,
    ListInput,
    SearchInput,
    UpdateContactInput,
)
from pylon_mcp.pylon_client import PylonClient
from pylon_mcp.tools.base import render_page, render_view, require_changes, validate_input
from pylon_mcp.views.tables import format_contacts_table


def create_list_contacts_handler(client: PylonClient, settings: Settings):
    async def pylon_list_contacts(limit: int | None = None, cursor: str | None = None) -> str:
        """List contacts as a compact table."""
        validated = validate_input(ListInput, limit=limit, cursor=cursor)
        page = await client.list_contacts(
            limit=validated.limit or settings.DEFAULT_LIST_LIMIT,
            cursor=validated.cursor,
        )
        return render_page(page, format_contacts_table)

    return pylon_list_contacts


def create_search_contacts_handler(client: PylonClient, settings: Settings):
    async def pylon_search_contacts(
        filter: dict[str, Any],
        limit: int | None = None,
        cursor: str | None = None,
    ) -> str:
        """Search contacts with filters such as {"email": {"string_contains": "@example.com"}}."""
        validated = validate_input(SearchInput, filter=filter, limit=limit, cursor=cursor)
        page = await client.search_contacts(
            validated.filter,
            limit=validated.limit or settings.DEFAULT_LIST_LIMIT,
            cursor=validated.cursor,
        )
        return render_page(page, format_contacts_table)

    return pylon_search_contacts


def create_get_contact_handler(client: PylonClient, settings: Settings):
    async def pylon_get_contact(id: str) -> dict[str, Any]:
        """Get contact details by ID."""
        validated = validate_input(EntityIdInput, id=id)
        return render_view(await client.get_contact(validated.id))

    return pylon_get_contact


def create_create_contact_handler(client: PylonClient, settings: Settings):
    async def pylon_create_contact(
        name: str,
        email: str | None = None,
        account_id: str | None = None,
        avatar_url: str | None = None,
        portal_role: str | None = None,
    ) -> dict[str, Any]:
        """Create a new contact."""
        validated = validate_input(
            CreateContactInput,
            name=name,
            email=email,
            account_id=account_id,
            avatar_url=avatar_url,
            portal_role=portal_role,
        )
        return render_view(await client.create_contact(validated.payload()))

    return pylon_create_contact


def create_update_contact_handler(client: PylonClient, settings: Settings):
    async def pylon_update_contact(
        id: str,
        name: str | None = None,
        email: str | None = None,
        account_id: str | None = None,
        avatar_url: str | None = None,
        portal_role: str | None = None,
    ) -> dict[str, Any]:
        """Update an existing contact."""
        validated = validate_input(
            UpdateContactInput,
            id=id,
            name=name,
            email=email,
            account_id=account_id,
            avatar_url=avatar_url,
            portal_role=portal_role,
        )
        changes = require_changes(validated.changes())
        return render_view(await client.update_contact(validated.id, changes))

    return pylon_update_contact


def create_delete_contact_handler(client: PylonClient, settings: Settings):
    async def pylon_delete_contact(id: str) -> dict[str, Any]:
        """Delete a contact."""
        validated = validate_input(EntityIdInput, id=id)
        return await client.delete_contact(validated.id)

    return pylon_delete_contact


HANDLERS = {
    "pylon_list_contacts": create_list_contacts_handler,
    "pylon_search_contacts": create_search_contacts_handler,
    "pylon_get_contact": create_get_contact_handler,
    "pylon_create_contact": create_create_contact_handler,
    "pylon_update_contact": create_update_contact_handler,
    "pylon_delete_contact": create_delete_contact_handler,
}
