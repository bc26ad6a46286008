"""Input sanitization for tool arguments.

``sanitize_string()`` cleans free text before it is sent to Pylon, and
``format_validation_errors()`` / ``summarize_validation_errors()`` turn a
Pydantic ``ValidationError`` into something an LLM caller can act on.
"""

from __future__ import annotations

import re
import unicodedata
from typing import Any

# C0 controls other than tab, newline and carriage return
_CONTROL_CHARS_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")


def sanitize_string(value: str) -> str:
    """Strip null bytes and control characters, then normalize to Unicode NFC.

    Applied as a Pydantic ``field_validator`` on free-text fields.
    """
    value = _CONTROL_CHARS_RE.sub("", value)
    return unicodedata.normalize("NFC", value)


def format_validation_errors(exc: Any) -> list[dict[str, str]]:
    """Convert a Pydantic ``ValidationError`` into a structured list.

    Returns ``{"field": ..., "message": ...}`` dicts.  Never includes stack
    traces or internal paths.
    """
    errors: list[dict[str, str]] = []
    for err in exc.errors():
        loc = err.get("loc", ())
        field = ".".join(str(part) for part in loc) if loc else "unknown"
        errors.append({
            "field": field,
            "message": err.get("msg", "Validation error"),
        })
    return errors


def summarize_validation_errors(exc: Any) -> str:
    """One-line ``field: message; ...`` summary of a ``ValidationError``."""
    return "; ".join(f"{e['field']}: {e['message']}" for e in format_validation_errors(exc))
