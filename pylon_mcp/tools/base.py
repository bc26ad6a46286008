"""Shared helpers for tool handlers.

Every handler follows the same shape: validate arguments into a Pydantic
input model, call ``PylonClient``, then render the projected result as a
table (lists) or a JSON-ready dict (single records).
"""

from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from fastmcp.exceptions import ToolError
from pydantic import BaseModel, ValidationError

from pylon_mcp.security.input_validators import summarize_validation_errors
from pylon_mcp.views.models import Page
from pylon_mcp.views.tables import pagination_footer

M = TypeVar("M", bound=BaseModel)


def validate_input(model: type[M], **kwargs: Any) -> M:
    """Build *model* from tool arguments, reporting failures field by field."""
    try:
        return model(**kwargs)
    except ValidationError as exc:
        raise ToolError(f"Invalid input: {summarize_validation_errors(exc)}") from exc


def require_changes(changes: dict[str, Any]) -> dict[str, Any]:
    if not changes:
        raise ToolError("Invalid input: provide at least one field to update")
    return changes


def render_view(view: BaseModel) -> dict[str, Any]:
    """JSON-ready dict of *view*, omitting fields the record did not have."""
    return view.model_dump(mode="json", exclude_none=True)


def render_page(page: Page, formatter: Callable[[Sequence[Any]], str]) -> str:
    """Table text for *page* followed by the next-cursor hint, if any."""
    return formatter(page.data) + pagination_footer(page.pagination)
