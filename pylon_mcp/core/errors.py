"""Exception hierarchy for pylon-mcp.

Two families live here:

* Filter validation errors, raised locally before any network call when a
  caller-supplied time window is unusable.
* Transport errors, raised by ``PylonClient`` when the Pylon API cannot be
  reached or answers with a non-success status.  These are never retried.
"""

from __future__ import annotations


class PylonMCPError(Exception):
    """Base exception for all pylon-mcp errors."""


# ── Filter validation ───────────────────────────────────────────────────


class FilterValidationError(PylonMCPError, ValueError):
    """Raised when a time-range filter cannot be sent to the API.

    Attributes:
        message: Description of the problem without the field prefix.
        field:   Filter field that carried the bad ``time_range`` (if any).
    """

    def __init__(self, message: str, *, field: str | None = None) -> None:
        self.message = message
        self.field = field
        if field:
            super().__init__(f"Invalid time_range for {field}: {message}")
        else:
            super().__init__(message)

    def for_field(self, field: str) -> FilterValidationError:
        """Return a copy of this error attributed to filter *field*."""
        return type(self)(self.message, field=field)


class InvalidTimestampError(FilterValidationError):
    """A timestamp is not a timezone-aware RFC 3339 date-time."""


class InvalidRangeError(FilterValidationError):
    """The range start is not strictly before its end."""


class RangeTooLargeError(FilterValidationError):
    """The range spans more than the API's maximum window."""

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        requested_days: float | None = None,
    ) -> None:
        self.requested_days = requested_days
        super().__init__(message, field=field)

    def for_field(self, field: str) -> RangeTooLargeError:
        return type(self)(self.message, field=field, requested_days=self.requested_days)


# ── Transport ───────────────────────────────────────────────────────────


class PylonAPIError(PylonMCPError):
    """Raised when the Pylon API answers with a non-success HTTP status."""

    def __init__(self, status_code: int, reason: str = "", body: str = "") -> None:
        self.status_code = status_code
        self.reason = reason
        self.body = body
        super().__init__(f"Pylon API error: {status_code} {reason} - {body}")


class BackendUnavailableError(PylonMCPError):
    """Raised when an HTTP connection to the Pylon API fails."""

    def __init__(self, service_name: str, detail: str = "") -> None:
        self.service_name = service_name
        self.detail = detail
        msg = f"Backend unavailable: {service_name}"
        if detail:
            msg += f" ({detail})"
        super().__init__(msg)


class RequestTimeoutError(PylonMCPError):
    """Raised when a Pylon API request exceeds its timeout."""

    def __init__(self, path: str, timeout_seconds: float) -> None:
        self.path = path
        self.timeout_seconds = timeout_seconds
        super().__init__(f"Request to '{path}' timed out after {timeout_seconds}s")
