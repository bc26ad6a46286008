"""Response projection: fixed-shape views of raw Pylon records and table rendering."""

from pylon_mcp.views.models import DetailLevel, Page, Pagination
from pylon_mcp.views.projection import (
    extract_related_id,
    project,
    project_many,
    strip_html_and_truncate,
)

__all__ = [
    "DetailLevel",
    "Page",
    "Pagination",
    "extract_related_id",
    "project",
    "project_many",
    "strip_html_and_truncate",
]
