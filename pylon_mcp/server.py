"""FastMCP server.

Creates a FastMCP server with every tool from the ``ToolRegistry``.  Each
handler validates its input, calls ``PylonClient`` (which sanitizes search
filters and projects responses), and renders a compact result.
"""

from collections.abc import Callable
from typing import Any

from fastmcp import FastMCP
from mcp.types import ToolAnnotations

from pylon_mcp.core.config import Settings
from pylon_mcp.pylon_client import PylonClient
from pylon_mcp.tool_registry import ToolRegistry
from pylon_mcp.tools import accounts, contacts, issues, messages, organization, tags, teams

# ── Handler factory mapping ────────────────────────────────────────────

_HANDLER_FACTORIES: dict[str, Callable[..., Any]] = {
    **organization.HANDLERS,
    **accounts.HANDLERS,
    **contacts.HANDLERS,
    **issues.HANDLERS,
    **messages.HANDLERS,
    **tags.HANDLERS,
    **teams.HANDLERS,
}


# ── Server factory ─────────────────────────────────────────────────────


def create_mcp_server(
    registry: ToolRegistry,
    client: PylonClient,
    settings: Settings | None = None,
) -> FastMCP:
    """Create a FastMCP server with all tools from the registry.

    Args:
        registry: Loaded ``ToolRegistry`` (from YAML config).
        client:   ``PylonClient`` used by every handler.
        settings: Settings supplying default page sizes.

    Returns:
        A configured ``FastMCP`` instance ready for stdio or SSE transport.

    Raises:
        ValueError: If a registry entry has no handler factory.
    """
    settings = settings or Settings()
    mcp = FastMCP(name=settings.SERVICE_NAME)

    for tool_def in registry.list_all():
        factory = _HANDLER_FACTORIES.get(tool_def.name)
        if factory is None:
            raise ValueError(
                f"No handler factory for tool '{tool_def.name}'. Available: {sorted(_HANDLER_FACTORIES.keys())}"
            )
        handler = factory(client, settings)
        mcp.tool(
            name=tool_def.name,
            description=tool_def.description,
            tags=set(tool_def.tags),
            annotations=ToolAnnotations(readOnlyHint=tool_def.read_only),
        )(handler)

    return mcp
