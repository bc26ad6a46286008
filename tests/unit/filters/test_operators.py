"""Tests for the per-field operator whitelist."""

import pytest

from pylon_mcp.filters.operators import VALID_OPERATORS, allowed_operators, is_known_field


class TestOperatorTable:
    def test_state_accepts_only_equality_operators(self):
        assert VALID_OPERATORS["state"] == frozenset({"equals", "in", "not_in"})

    @pytest.mark.parametrize("field", ["created_at", "resolved_at", "latest_message_activity_at"])
    def test_time_fields(self, field):
        assert VALID_OPERATORS[field] == frozenset({"time_is_after", "time_is_before", "time_range"})

    def test_title_is_string_search_only(self):
        assert VALID_OPERATORS["title"] == frozenset({"string_contains", "string_does_not_contain"})

    def test_optional_id_fields_accept_presence_checks(self):
        assert {"is_set", "is_unset"} <= VALID_OPERATORS["assignee_id"]
        assert "is_set" not in VALID_OPERATORS["follower_user_id"]

    def test_body_html_is_not_searchable(self):
        assert "body_html" not in VALID_OPERATORS

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            VALID_OPERATORS["state"] = frozenset({"gte"})  # type: ignore[index]


class TestLookups:
    def test_allowed_operators_known_field(self):
        assert allowed_operators("tags") == VALID_OPERATORS["tags"]

    def test_allowed_operators_unknown_field(self):
        assert allowed_operators("custom_field") is None

    def test_is_known_field(self):
        assert is_known_field("email")
        assert not is_known_field("custom_field")
