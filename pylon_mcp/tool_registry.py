"""Tool registration from YAML config.

Loads tool definitions from ``config/tools.yaml`` and checks each entry
against the set of tools this server knows how to serve.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

# ── Known tools ────────────────────────────────────────────────────────

_KNOWN_TOOLS: frozenset[str] = frozenset(
    {
        "pylon_get_organization",
        # Accounts
        "pylon_list_accounts",
        "pylon_search_accounts",
        "pylon_get_account",
        "pylon_create_account",
        "pylon_update_account",
        "pylon_delete_account",
        # Contacts
        "pylon_list_contacts",
        "pylon_search_contacts",
        "pylon_get_contact",
        "pylon_create_contact",
        "pylon_update_contact",
        "pylon_delete_contact",
        # Issues
        "pylon_list_issues",
        "pylon_search_issues",
        "pylon_get_issue",
        "pylon_get_issue_body",
        "pylon_create_issue",
        "pylon_update_issue",
        "pylon_delete_issue",
        "pylon_snooze_issue",
        "pylon_get_issue_followers",
        "pylon_update_issue_followers",
        # Messages
        "pylon_redact_message",
        # Tags
        "pylon_list_tags",
        "pylon_get_tag",
        "pylon_create_tag",
        "pylon_update_tag",
        "pylon_delete_tag",
        # Teams
        "pylon_list_teams",
        "pylon_get_team",
        "pylon_create_team",
        "pylon_update_team",
    }
)


# ── Data class ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ToolDefinition:
    """Immutable definition of a single MCP tool.

    Attributes:
        name:        Tool identifier (e.g. ``pylon_search_issues``).
        description: Human-readable description shown in ``tools/list``.
        read_only:   ``True`` when the tool never modifies Pylon data.
        tags:        Classification tags for filtering.
    """

    name: str
    description: str
    read_only: bool = True
    tags: list[str] = field(default_factory=list)


# ── Registry ────────────────────────────────────────────────────────────


class ToolRegistry:
    """Loads tool definitions from a YAML config file.

    Args:
        config_path: Path to ``tools.yaml`` with the ``tools:`` list.

    Raises:
        FileNotFoundError: If the YAML file does not exist.
        ValueError: If the YAML is invalid, missing required keys,
                    contains unknown tool names, or has duplicates.
    """

    def __init__(self, config_path: str | Path) -> None:
        self._tools: dict[str, ToolDefinition] = {}
        self._load(Path(config_path))

    # ── Loading ─────────────────────────────────────────────────────

    def _load(self, path: Path) -> None:
        if not path.exists():
            raise FileNotFoundError(f"Tool config not found: {path}")

        raw = path.read_text(encoding="utf-8")
        try:
            data: Any = yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {path}: {exc}") from exc

        if not isinstance(data, dict) or "tools" not in data:
            raise ValueError(f"YAML must contain a top-level 'tools' key in {path}")

        tools_list = data["tools"]
        if not tools_list:
            raise ValueError(f"No tools defined in {path}")

        for item in tools_list:
            self._register(item, path)

    def _register(self, item: dict[str, Any], path: Path) -> None:
        name = item.get("name")
        if not name:
            raise ValueError(f"Tool entry missing 'name' in {path}")

        if name in self._tools:
            raise ValueError(f"Duplicate tool name '{name}' in {path}")

        if name not in _KNOWN_TOOLS:
            raise ValueError(f"Unknown tool '{name}' in {path}. Valid tools: {sorted(_KNOWN_TOOLS)}")

        description = item.get("description")
        if not description:
            raise ValueError(f"Tool '{name}' missing 'description' in {path}")

        read_only = item.get("read_only", True)
        if not isinstance(read_only, bool):
            raise ValueError(f"Tool '{name}' has non-boolean 'read_only' in {path}")

        self._tools[name] = ToolDefinition(
            name=name,
            description=description,
            read_only=read_only,
            tags=item.get("tags", []),
        )

    # ── Access ──────────────────────────────────────────────────────

    def get(self, name: str) -> ToolDefinition | None:
        """Return the ``ToolDefinition`` for *name*, or ``None``."""
        return self._tools.get(name)

    def list_all(self) -> list[ToolDefinition]:
        """Return all registered tool definitions."""
        return list(self._tools.values())

    @property
    def tool_count(self) -> int:
        """Number of registered tools."""
        return len(self._tools)

    def tool_names(self) -> set[str]:
        """Return the set of all registered tool names."""
        return set(self._tools.keys())
