"""Organization tool handler."""

from typing import Any

from pylon_mcp.core.config import Settings
from pylon_mcp.pylon_client import PylonClient


def create_get_organization_handler(client: PylonClient, settings: Settings):
    async def pylon_get_organization() -> dict[str, Any]:
        """Get information about your Pylon organization."""
        return await client.get_me()

    return pylon_get_organization


HANDLERS = {
    "pylon_get_organization": create_get_organization_handler,
}
