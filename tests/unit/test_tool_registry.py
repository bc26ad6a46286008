"""Tests for ToolRegistry.

Loads both the packaged ``tools.yaml`` and small hand-written configs to
exercise each validation rule.
"""

from pathlib import Path

import pytest

from pylon_mcp.server import _HANDLER_FACTORIES
from pylon_mcp.tool_registry import _KNOWN_TOOLS, ToolDefinition, ToolRegistry

# ── Constants ───────────────────────────────────────────────────────────

TOOLS_YAML = Path(__file__).resolve().parents[2] / "pylon_mcp" / "config" / "tools.yaml"

VALID_TOOLS_YAML = """\
tools:
  - name: pylon_get_organization
    description: "Get information about your Pylon organization."
    tags: [organization]
  - name: pylon_search_issues
    description: "Search issues with filters."
    tags: [issues, search]
  - name: pylon_delete_tag
    description: "Delete a tag."
    read_only: false
    tags: [tags, write]
"""


def _write(tmp_path: Path, content: str) -> Path:
    p = tmp_path / "tools.yaml"
    p.write_text(content)
    return p


@pytest.fixture()
def registry(tmp_path: Path) -> ToolRegistry:
    return ToolRegistry(_write(tmp_path, VALID_TOOLS_YAML))


# ── Loading ─────────────────────────────────────────────────────────────


class TestLoading:
    def test_tool_count(self, registry):
        assert registry.tool_count == 3

    def test_tool_names(self, registry):
        assert registry.tool_names() == {
            "pylon_get_organization",
            "pylon_search_issues",
            "pylon_delete_tag",
        }

    def test_get_returns_definition(self, registry):
        tool = registry.get("pylon_search_issues")
        assert isinstance(tool, ToolDefinition)
        assert tool.description == "Search issues with filters."
        assert tool.tags == ["issues", "search"]

    def test_get_unknown_returns_none(self, registry):
        assert registry.get("nope") is None

    def test_read_only_defaults_true(self, registry):
        assert registry.get("pylon_search_issues").read_only is True
        assert registry.get("pylon_delete_tag").read_only is False

    def test_definitions_are_frozen(self, registry):
        tool = registry.get("pylon_delete_tag")
        with pytest.raises(AttributeError):
            tool.name = "other"

    def test_list_all_preserves_order(self, registry):
        assert [t.name for t in registry.list_all()] == [
            "pylon_get_organization",
            "pylon_search_issues",
            "pylon_delete_tag",
        ]


class TestPackagedConfig:
    def test_loads_all_tools(self):
        registry = ToolRegistry(TOOLS_YAML)
        assert registry.tool_count == 33

    def test_packaged_tools_match_known_tools(self):
        assert ToolRegistry(TOOLS_YAML).tool_names() == _KNOWN_TOOLS

    def test_every_known_tool_has_handler(self):
        assert set(_HANDLER_FACTORIES) == _KNOWN_TOOLS

    def test_all_tools_prefixed(self):
        assert all(name.startswith("pylon_") for name in ToolRegistry(TOOLS_YAML).tool_names())


# ── Validation ──────────────────────────────────────────────────────────


class TestValidation:
    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ToolRegistry(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        with pytest.raises(ValueError, match="Invalid YAML"):
            ToolRegistry(_write(tmp_path, "tools: [unclosed"))

    def test_missing_tools_key(self, tmp_path):
        with pytest.raises(ValueError, match="top-level 'tools'"):
            ToolRegistry(_write(tmp_path, "other: []\n"))

    def test_empty_tools(self, tmp_path):
        with pytest.raises(ValueError, match="No tools defined"):
            ToolRegistry(_write(tmp_path, "tools: []\n"))

    def test_missing_name(self, tmp_path):
        with pytest.raises(ValueError, match="missing 'name'"):
            ToolRegistry(_write(tmp_path, 'tools:\n  - description: "x"\n'))

    def test_duplicate_name(self, tmp_path):
        content = (
            "tools:\n"
            '  - name: pylon_get_tag\n    description: "a"\n'
            '  - name: pylon_get_tag\n    description: "b"\n'
        )
        with pytest.raises(ValueError, match="Duplicate tool name"):
            ToolRegistry(_write(tmp_path, content))

    def test_unknown_tool(self, tmp_path):
        with pytest.raises(ValueError, match="Unknown tool 'pylon_launch_rocket'"):
            ToolRegistry(_write(tmp_path, 'tools:\n  - name: pylon_launch_rocket\n    description: "x"\n'))

    def test_missing_description(self, tmp_path):
        with pytest.raises(ValueError, match="missing 'description'"):
            ToolRegistry(_write(tmp_path, "tools:\n  - name: pylon_get_tag\n"))

    def test_non_boolean_read_only(self, tmp_path):
        content = 'tools:\n  - name: pylon_get_tag\n    description: "x"\n    read_only: "no"\n'
        with pytest.raises(ValueError, match="non-boolean 'read_only'"):
            ToolRegistry(_write(tmp_path, content))
