"""stdio entrypoint: ``python -m pylon_mcp`` or the ``pylon-mcp`` script.

Logs go to stderr because stdout carries the MCP protocol stream.
"""

import asyncio
import logging
import sys

from pylon_mcp.core.config import Settings
from pylon_mcp.pylon_client import PylonClient
from pylon_mcp.server import create_mcp_server
from pylon_mcp.tool_registry import ToolRegistry

logger = logging.getLogger("pylon_mcp")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


async def serve(settings: Settings) -> None:
    registry = ToolRegistry(settings.TOOLS_CONFIG_PATH)
    client = PylonClient(settings)
    mcp = create_mcp_server(registry, client, settings)
    logger.info("Starting %s with %d tools over stdio", settings.SERVICE_NAME, registry.tool_count)
    try:
        await mcp.run_async(transport="stdio")
    finally:
        await client.close()


def main() -> None:
    settings = Settings()
    configure_logging(settings.LOG_LEVEL)

    if not settings.API_TOKEN:
        logger.error("PYLON_API_TOKEN environment variable is required")
        sys.exit(1)

    asyncio.run(serve(settings))


if __name__ == "__main__":
    main()
