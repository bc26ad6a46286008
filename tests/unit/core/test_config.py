"""Tests for Settings.

Verifies that Settings:
- Loads typed defaults for all fields
- Reads overrides from PYLON_ prefixed env vars
- Points TOOLS_CONFIG_PATH at the packaged tools.yaml
"""

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("PYLON_API_TOKEN", "PYLON_API_BASE_URL", "PYLON_PORT", "PYLON_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


class TestSettingsDefaults:
    """Settings loaded from environment variables with typed defaults."""

    def test_service_name_default(self):
        from pylon_mcp.core.config import Settings

        settings = Settings()
        assert settings.SERVICE_NAME == "pylon-mcp"

    def test_service_version_default(self):
        from pylon_mcp.core.config import Settings

        settings = Settings()
        assert settings.SERVICE_VERSION == "1.0.0"

    def test_port_is_int(self):
        from pylon_mcp.core.config import Settings

        settings = Settings()
        assert isinstance(settings.PORT, int)

    def test_api_base_url_default(self):
        from pylon_mcp.core.config import Settings

        settings = Settings()
        assert settings.API_BASE_URL == "https://api.usepylon.com"

    def test_api_token_empty_by_default(self):
        from pylon_mcp.core.config import Settings

        settings = Settings()
        assert settings.API_TOKEN == ""

    def test_request_timeout_default(self):
        from pylon_mcp.core.config import Settings

        settings = Settings()
        assert settings.REQUEST_TIMEOUT_SECONDS == 30.0

    def test_default_page_sizes(self):
        from pylon_mcp.core.config import Settings

        settings = Settings()
        assert settings.DEFAULT_ISSUE_LIMIT == 25
        assert settings.DEFAULT_LIST_LIMIT == 50

    def test_tools_config_path_points_at_packaged_yaml(self):
        from pylon_mcp.core.config import Settings

        path = Path(Settings().TOOLS_CONFIG_PATH)
        assert path.name == "tools.yaml"
        assert path.exists()


class TestSettingsEnvOverrides:
    """PYLON_ prefixed environment variables override defaults."""

    def test_api_token_from_env(self, monkeypatch):
        from pylon_mcp.core.config import Settings

        monkeypatch.setenv("PYLON_API_TOKEN", "secret-token")
        assert Settings().API_TOKEN == "secret-token"

    def test_base_url_from_env(self, monkeypatch):
        from pylon_mcp.core.config import Settings

        monkeypatch.setenv("PYLON_API_BASE_URL", "https://pylon.internal")
        assert Settings().API_BASE_URL == "https://pylon.internal"

    def test_port_override_from_env(self, monkeypatch):
        from pylon_mcp.core.config import Settings

        monkeypatch.setenv("PYLON_PORT", "9999")
        settings = Settings()
        assert settings.PORT == 9999

    def test_unprefixed_env_ignored(self, monkeypatch):
        from pylon_mcp.core.config import Settings

        monkeypatch.setenv("API_TOKEN", "wrong")
        assert Settings().API_TOKEN == ""
