"""Settings for the pylon-mcp service.

All settings are loaded from environment variables with the ``PYLON_``
prefix, so the API token is read from ``PYLON_API_TOKEN``.
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings

_DEFAULT_TOOLS_CONFIG = Path(__file__).parent.parent / "config" / "tools.yaml"


class Settings(BaseSettings):
    """pylon-mcp configuration.

    All fields can be overridden by environment variables prefixed with
    ``PYLON_``.  For example, ``PYLON_PORT=9999`` overrides the default port.
    """

    # ── Service identity ────────────────────────────────────────────
    SERVICE_NAME: str = "pylon-mcp"
    SERVICE_VERSION: str = "1.0.0"
    HOST: str = "0.0.0.0"
    PORT: int = 8087

    # ── Pylon API ───────────────────────────────────────────────────
    API_BASE_URL: str = "https://api.usepylon.com"
    API_TOKEN: str = ""  # Required for the stdio entrypoint
    REQUEST_TIMEOUT_SECONDS: float = 30.0

    # ── Tool defaults ───────────────────────────────────────────────
    DEFAULT_ISSUE_LIMIT: int = 25
    DEFAULT_LIST_LIMIT: int = 50
    TOOLS_CONFIG_PATH: str = str(_DEFAULT_TOOLS_CONFIG)

    # ── Logging ─────────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"

    model_config = {
        "env_prefix": "PYLON_",
    }
