"""Tests for record projection into views."""

import pytest
from pydantic import ValidationError

from pylon_mcp.views.models import (
    AccountMinimal,
    AccountStandard,
    DetailLevel,
    IssueFull,
    IssueMinimal,
    IssueStandard,
    TagView,
    TeamStandard,
)
from pylon_mcp.views.projection import (
    MAX_BODY_PREVIEW_LENGTH,
    extract_related_id,
    project,
    project_many,
    strip_html,
    strip_html_and_truncate,
    to_account_minimal,
    to_contact_minimal,
    to_contact_standard,
    to_issue_body,
    to_issue_full,
    to_issue_minimal,
    to_issue_standard,
    to_team_minimal,
    to_team_standard,
    truncate_text,
)

RAW_ISSUE = {
    "id": "iss_1",
    "number": 42,
    "title": "Login broken",
    "state": "new",
    "link": "https://app.usepylon.com/issues/42",
    "created_at": "2024-01-05T10:00:00Z",
    "assignee": {"id": "usr_9", "email": "agent@example.com"},
    "account_id": "acc_1",
    "account": {"id": "acc_other", "name": "Acme"},
    "requester": {"id": "con_3"},
    "team": {"id": "team_2"},
    "tags": ["vip", "bug"],
    "body_html": "<p>Hello   <b>world</b></p>\n<p>Second</p>",
    "source": "email",
    "type": "conversation",
    "customer_portal_visible": True,
    "custom_fields": {"priority": {"value": "high"}},
    "attachment_urls": ["https://files.example.com/a.png"],
}


class TestExtractRelatedId:
    def test_flat_field_preferred(self):
        assert extract_related_id(RAW_ISSUE, "account") == "acc_1"

    def test_nested_object_used_when_flat_missing(self):
        assert extract_related_id({"assignee": {"id": "usr_9"}}, "assignee") == "usr_9"

    def test_missing_returns_none(self):
        assert extract_related_id({}, "assignee") is None

    def test_explicit_field_name(self):
        assert extract_related_id({"owner_user_id": "u1"}, "owner", "owner_user_id") == "u1"

    def test_non_string_flat_falls_back_to_nested(self):
        assert extract_related_id({"team_id": None, "team": {"id": "t1"}}, "team") == "t1"

    def test_nested_without_id(self):
        assert extract_related_id({"team": {"name": "Support"}}, "team") is None


class TestTextHelpers:
    def test_strip_html_removes_tags_and_collapses_whitespace(self):
        assert strip_html(RAW_ISSUE["body_html"]) == "Hello world Second"

    def test_strip_html_empty(self):
        assert strip_html(None) == ""
        assert strip_html("") == ""

    def test_strip_html_leaves_no_angle_bracket_runs(self):
        assert "<" not in strip_html("<div><span class='x'>a</span><br/></div>")

    def test_truncate_short_text_unchanged(self):
        assert truncate_text("short", 10) == "short"

    def test_truncate_appends_ellipsis_within_limit(self):
        result = truncate_text("a" * 20, 10)
        assert result == "a" * 7 + "..."
        assert len(result) == 10

    def test_truncate_tiny_limit(self):
        assert truncate_text("abcdef", 2) == "ab"

    def test_truncate_limit_equal_to_ellipsis(self):
        assert truncate_text("abcdef", 3) == "..."
        assert strip_html_and_truncate("<p>abcdef</p>", 3) == "..."

    @pytest.mark.parametrize("max_length", [5, 50, 500])
    def test_strip_and_truncate_bounded(self, max_length):
        html = "<p>" + "word " * 400 + "</p>"
        assert len(strip_html_and_truncate(html, max_length)) <= max_length


class TestIssueViews:
    def test_minimal_fields(self):
        view = to_issue_minimal(RAW_ISSUE)
        assert isinstance(view, IssueMinimal)
        assert view.id == "iss_1"
        assert view.number == 42
        assert view.assignee_id == "usr_9"
        assert view.account_id == "acc_1"
        assert view.tags == ["vip", "bug"]

    def test_minimal_excludes_bulky_fields(self):
        dumped = to_issue_minimal(RAW_ISSUE).model_dump()
        for field in ("body_html", "custom_fields", "attachment_urls", "assignee", "account"):
            assert field not in dumped

    def test_standard_has_no_body(self):
        view = to_issue_standard(RAW_ISSUE)
        assert isinstance(view, IssueStandard)
        assert "body_html" not in view.model_dump()
        assert view.requester_id == "con_3"
        assert view.team_id == "team_2"
        assert view.customer_portal_visible is True

    def test_full_body_stripped_and_capped(self):
        raw = {**RAW_ISSUE, "body_html": "<p>" + "x" * 2000 + "</p>"}
        view = to_issue_full(raw)
        assert isinstance(view, IssueFull)
        assert len(view.body_html) <= MAX_BODY_PREVIEW_LENGTH
        assert view.body_html.endswith("...")
        assert "<" not in view.body_html

    def test_full_without_body(self):
        assert to_issue_full({"id": "iss_2"}).body_html == ""

    def test_views_nest_field_for_field(self):
        minimal = to_issue_minimal(RAW_ISSUE).model_dump()
        standard = to_issue_standard(RAW_ISSUE).model_dump()
        full = to_issue_full(RAW_ISSUE).model_dump()
        assert minimal.items() <= standard.items()
        assert standard.items() <= full.items()

    def test_views_are_frozen(self):
        view = to_issue_minimal(RAW_ISSUE)
        with pytest.raises(ValidationError):
            view.title = "changed"


class TestIssueBody:
    def test_body_truncated_with_total_length(self):
        raw = {"id": "iss_1", "number": 7, "body_html": "<p>" + "y" * 300 + "</p>"}
        body = to_issue_body(raw, max_length=100)
        assert body is not None
        assert body.total_length == 300
        assert len(body.text) == 100
        assert body.number == 7

    def test_body_not_truncated_when_short(self):
        body = to_issue_body({"id": "iss_1", "body_html": "<b>hi</b>"})
        assert body.text == "hi"
        assert body.total_length == 2

    def test_missing_body_returns_none(self):
        assert to_issue_body({"id": "iss_1"}) is None
        assert to_issue_body({"id": "iss_1", "body_html": ""}) is None


class TestOtherViews:
    def test_account_minimal_and_standard(self):
        raw = {
            "id": "acc_1",
            "name": "Acme",
            "primary_domain": "acme.com",
            "domains": ["acme.com", "acme.io"],
            "owner": {"id": "usr_1"},
            "tags": ["enterprise"],
            "created_at": "2023-01-01T00:00:00Z",
            "type": "customer",
            "crm_settings": {"huge": "blob"},
        }
        minimal = to_account_minimal(raw)
        assert isinstance(minimal, AccountMinimal)
        assert minimal.owner_id == "usr_1"
        assert "domains" not in minimal.model_dump()
        standard = project("account", raw, DetailLevel.STANDARD)
        assert isinstance(standard, AccountStandard)
        assert standard.domains == ["acme.com", "acme.io"]
        assert "crm_settings" not in standard.model_dump()

    def test_contact_views(self):
        raw = {
            "id": "con_1",
            "name": "Jane",
            "email": "jane@acme.com",
            "emails": ["jane@acme.com"],
            "account": {"id": "acc_1"},
            "portal_role": "member",
        }
        assert to_contact_minimal(raw).account_id == "acc_1"
        assert to_contact_standard(raw).emails == ["jane@acme.com"]

    def test_team_views(self):
        raw = {"id": "team_1", "name": "Support", "users": [{"id": "u1", "email": "a@x.com"}, {"id": "u2"}]}
        minimal = to_team_minimal(raw)
        assert minimal.member_count == 2
        assert "users" not in minimal.model_dump()
        standard = to_team_standard(raw)
        assert isinstance(standard, TeamStandard)
        assert [user.id for user in standard.users] == ["u1", "u2"]

    def test_team_without_users(self):
        assert to_team_minimal({"id": "team_1"}).member_count is None


class TestProjectDispatch:
    @pytest.mark.parametrize(
        ("level", "expected"),
        [
            (DetailLevel.MINIMAL, IssueMinimal),
            (DetailLevel.STANDARD, IssueStandard),
            (DetailLevel.FULL, IssueFull),
        ],
    )
    def test_issue_levels(self, level, expected):
        assert type(project("issue", RAW_ISSUE, level)) is expected

    def test_level_accepts_plain_string(self):
        assert type(project("issue", RAW_ISSUE, "standard")) is IssueStandard

    def test_full_on_non_issue_kind_is_standard(self):
        assert type(project("account", {"id": "a"}, DetailLevel.FULL)) is AccountStandard

    def test_tag(self):
        view = project("tag", {"id": "tag_1", "value": "vip", "object_type": "issue", "hex_color": "#ff0000"})
        assert isinstance(view, TagView)
        assert view.hex_color == "#ff0000"

    def test_unknown_kind(self):
        with pytest.raises(ValueError, match="Unknown entity kind"):
            project("widget", {"id": "w"})

    def test_project_many_skips_non_mappings(self):
        views = project_many("issue", [RAW_ISSUE, "junk", None])
        assert [view.id for view in views] == ["iss_1"]

    def test_project_many_non_list(self):
        assert project_many("issue", None) == []


class TestMalformedRecords:
    def test_numeric_scalars_become_strings(self):
        view = project("issue", {"id": 7, "title": 123, "state": 4.5})
        assert view.id == "7"
        assert view.title == "123"
        assert view.state == "4.5"

    def test_unusable_scalars_become_none(self):
        view = project(
            "issue",
            {"id": "iss_1", "title": {"text": "x"}, "link": ["a"], "number": "abc"},
            DetailLevel.STANDARD,
        )
        assert view.title is None
        assert view.link is None
        assert view.number is None

    def test_numeric_string_number(self):
        assert to_issue_minimal({"id": "iss_1", "number": "42"}).number == 42

    def test_non_boolean_portal_visibility_dropped(self):
        assert to_issue_standard({"id": "iss_1", "customer_portal_visible": "yes"}).customer_portal_visible is None

    def test_tag_list_keeps_only_scalars(self):
        assert to_issue_minimal({"id": "iss_1", "tags": ["vip", 3, None, {"x": 1}]}).tags == ["vip", "3"]

    def test_non_string_body(self):
        assert to_issue_full({"id": "iss_1", "body_html": 12}).body_html == "12"
        assert to_issue_body({"id": "iss_1", "body_html": {"html": "x"}}) is None

    def test_markup_only_body_is_empty(self):
        assert to_issue_body({"id": "iss_1", "body_html": "<p> </p>"}) is None

    def test_team_members_without_id_skipped(self):
        raw = {"id": "team_1", "users": [{"email": "a@x.com"}, {"id": 42, "email": 5}, "junk", {"id": "u2"}]}
        standard = to_team_standard(raw)
        assert [user.id for user in standard.users] == ["42", "u2"]
        assert standard.users[0].email == "5"

    def test_off_shape_records_never_raise(self):
        raw = {"id": None, "name": ["x"], "email": {"a": 1}, "domains": "acme.com", "users": {"id": "u1"}}
        for kind in ("issue", "account", "contact", "team", "tag"):
            project(kind, raw, DetailLevel.FULL)
