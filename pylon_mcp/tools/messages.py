"""Message tool handler."""

from typing import Any

from pylon_mcp.core.config import Settings
from pylon_mcp.models.schemas import RedactMessageInput
from pylon_mcp.pylon_client import PylonClient
from pylon_mcp.tools.base import validate_input


def create_redact_message_handler(client: PylonClient, settings: Settings):
    async def pylon_redact_message(issue_id: str, message_id: str) -> dict[str, Any]:
        """Redact a message from an issue."""
        validated = validate_input(RedactMessageInput, issue_id=issue_id, message_id=message_id)
        return await client.redact_message(validated.issue_id, validated.message_id)

    return pylon_redact_message


HANDLERS = {
    "pylon_redact_message": create_redact_message_handler,
}
