"""Account tool handlers.

List and search return a compact table of Minimal views; get, create and
update return the Standard view.
"""

from typing import Any

from pylon_mcp.core.config import Settings
from pylon_mcp.models.schemas import (
    CreateAccountInput,
    EntityIdInput,
    ListInput,
    SearchInput,
    UpdateAccountInput,
)
from pylon_mcp.pylon_client import PylonClient
from pylon_mcp.tools.base import render_page, render_view, require_changes, validate_input
from pylon_mcp.views.tables import format_accounts_table


def create_list_accounts_handler(client: PylonClient, settings: Settings):
    async def pylon_list_accounts(limit: int | None = None, cursor: str | None = None) -> str:
        """List accounts as a compact table."""
        validated = validate_input(ListInput, limit=limit, cursor=cursor)
        page = await client.list_accounts(
            limit=validated.limit or settings.DEFAULT_LIST_LIMIT,
            cursor=validated.cursor,
        )
        return render_page(page, format_accounts_table)

    return pylon_list_accounts


def create_search_accounts_handler(client: PylonClient, settings: Settings):
    async def pylon_search_accounts(
        filter: dict[str, Any],
        limit: int | None = None,
        cursor: str | None = None,
    ) -> str:
        """Search accounts with filters such as {"name": {"string_contains": "acme"}}."""
        validated = validate_input(SearchInput, filter=filter, limit=limit, cursor=cursor)
        page = await client.search_accounts(
            validated.filter,
            limit=validated.limit or settings.DEFAULT_LIST_LIMIT,
            cursor=validated.cursor,
        )
        return render_page(page, format_accounts_table)

    return pylon_search_accounts


def create_get_account_handler(client: PylonClient, settings: Settings):
    async def pylon_get_account(id: str) -> dict[str, Any]:
        """Get account details by ID."""
        validated = validate_input(EntityIdInput, id=id)
        return render_view(await client.get_account(validated.id))

    return pylon_get_account


def create_create_account_handler(client: PylonClient, settings: Settings):
    async def pylon_create_account(
        name: str,
        domains: list[str] | None = None,
        primary_domain: str | None = None,
        logo_url: str | None = None,
        owner_id: str | None = None,
        tags: list[str] | None = None,
    ) -> dict[str, Any]:
        """Create a new account."""
        validated = validate_input(
            CreateAccountInput,
            name=name,
            domains=domains,
            primary_domain=primary_domain,
            logo_url=logo_url,
            owner_id=owner_id,
            tags=tags,
        )
        return render_view(await client.create_account(validated.payload()))

    return pylon_create_account


def create_update_account_handler(client: PylonClient, settings: Settings):
    async def pylon_update_account(
        id: str,
        name: str | None = None,
        domains: list[str] | None = None,
        primary_domain: str | None = None,
        logo_url: str | None = None,
        owner_id: str | None = None,
        tags: list[str] | None = None,
    ) -> dict[str, Any]:
        """Update an existing account."""
        validated = validate_input(
            UpdateAccountInput,
            id=id,
            name=name,
            domains=domains,
            primary_domain=primary_domain,
            logo_url=logo_url,
            owner_id=owner_id,
            tags=tags,
        )
        changes = require_changes(validated.changes())
        return render_view(await client.update_account(validated.id, changes))

    return pylon_update_account


def create_delete_account_handler(client: PylonClient, settings: Settings):
    async def pylon_delete_account(id: str) -> dict[str, Any]:
        """Delete an account."""
        validated = validate_input(EntityIdInput, id=id)
        return await client.delete_account(validated.id)

    return pylon_delete_account


HANDLERS = {
    "pylon_list_accounts": create_list_accounts_handler,
    "pylon_search_accounts": create_search_accounts_handler,
    "pylon_get_account": create_get_account_handler,
    "pylon_create_account": create_create_account_handler,
    "pylon_update_account": create_update_account_handler,
    "pylon_delete_account": create_delete_account_handler,
}
