"""FastAPI application entrypoint for HTTP hosting.

Provides a ``/health`` endpoint, request-ID middleware, and the FastMCP
server mounted at ``/mcp`` over SSE.  The stdio entrypoint lives in
``pylon_mcp.__main__``.
"""

import logging
import time
import uuid
from pathlib import Path

from fastapi import FastAPI, Request, Response

from pylon_mcp.core.config import Settings
from pylon_mcp.models.schemas import HealthResponse

logger = logging.getLogger(__name__)

settings = Settings()

_start_time = time.monotonic()

app = FastAPI(
    title=settings.SERVICE_NAME,
    version=settings.SERVICE_VERSION,
)


@app.middleware("http")
async def request_id_middleware(request: Request, call_next) -> Response:
    """Assign or preserve a unique request ID on every request."""
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


@app.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Return service health with name, version, status, and uptime."""
    return HealthResponse(
        service=settings.SERVICE_NAME,
        version=settings.SERVICE_VERSION,
        status="healthy",
        uptime_seconds=round(time.monotonic() - _start_time, 2),
    )


# ── MCP Protocol Server ─────────────────────────────────────────────────

_config_path = Path(settings.TOOLS_CONFIG_PATH)

if _config_path.exists():
    from pylon_mcp.pylon_client import PylonClient
    from pylon_mcp.server import create_mcp_server
    from pylon_mcp.tool_registry import ToolRegistry

    if not settings.API_TOKEN:
        logger.warning("PYLON_API_TOKEN is not set; Pylon API calls will be rejected")

    _registry = ToolRegistry(_config_path)
    _client = PylonClient(settings)
    mcp_server = create_mcp_server(_registry, _client, settings)
    app.mount("/mcp", mcp_server.http_app(transport="sse"))
    logger.info("MCP server mounted at /mcp with %d tools", _registry.tool_count)
else:
    logger.warning("%s not found; MCP server not mounted", _config_path)
