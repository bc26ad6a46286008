"""Tests for the pylon-mcp exception hierarchy."""

import pytest

from pylon_mcp.core.errors import (
    BackendUnavailableError,
    FilterValidationError,
    InvalidRangeError,
    InvalidTimestampError,
    PylonAPIError,
    PylonMCPError,
    RangeTooLargeError,
    RequestTimeoutError,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        "exc_class",
        [InvalidTimestampError, InvalidRangeError, RangeTooLargeError],
    )
    def test_filter_errors_are_value_errors(self, exc_class):
        assert issubclass(exc_class, FilterValidationError)
        assert issubclass(exc_class, ValueError)
        assert issubclass(exc_class, PylonMCPError)

    @pytest.mark.parametrize(
        "exc_class",
        [PylonAPIError, BackendUnavailableError, RequestTimeoutError],
    )
    def test_transport_errors_are_not_value_errors(self, exc_class):
        assert issubclass(exc_class, PylonMCPError)
        assert not issubclass(exc_class, ValueError)


class TestFilterValidationError:
    def test_message_without_field(self):
        err = InvalidRangeError("start_time must be before end_time")
        assert str(err) == "start_time must be before end_time"
        assert err.field is None

    def test_message_with_field(self):
        err = InvalidRangeError("start_time must be before end_time", field="created_at")
        assert str(err) == "Invalid time_range for created_at: start_time must be before end_time"

    def test_for_field_keeps_type_and_message(self):
        err = InvalidTimestampError("Invalid start_time format: x").for_field("resolved_at")
        assert type(err) is InvalidTimestampError
        assert err.message == "Invalid start_time format: x"
        assert err.field == "resolved_at"

    def test_range_too_large_keeps_requested_days(self):
        err = RangeTooLargeError("too big", requested_days=45.5).for_field("created_at")
        assert type(err) is RangeTooLargeError
        assert err.requested_days == 45.5
        assert err.field == "created_at"


class TestTransportErrors:
    def test_api_error_message(self):
        err = PylonAPIError(404, "Not Found", '{"error":"missing"}')
        assert err.status_code == 404
        assert str(err) == 'Pylon API error: 404 Not Found - {"error":"missing"}'

    def test_backend_unavailable_message(self):
        err = BackendUnavailableError("pylon", "Connection failed")
        assert str(err) == "Backend unavailable: pylon (Connection failed)"

    def test_backend_unavailable_without_detail(self):
        assert str(BackendUnavailableError("pylon")) == "Backend unavailable: pylon"

    def test_timeout_message(self):
        err = RequestTimeoutError("/issues/search", 30.0)
        assert str(err) == "Request to '/issues/search' timed out after 30.0s"
