"""
Unit tests for the error taxonomy and its HTTP mapping.
"""

import json

import pytest

from event_tracker.errors import (
    ERROR_RESPONSES,
    AppError,
    DatabaseError,
    ErrorKind,
    InternalError,
    InvalidJSONError,
    NotFoundError,
    RequestBodyError,
    error_response,
)


def body_of(response):
    return json.loads(response.body)


class TestErrorMapping:
    """Tests for error_response."""

    def test_every_kind_is_mapped(self):
        """The mapping covers the whole enum."""
        assert set(ERROR_RESPONSES) == set(ErrorKind)

    @pytest.mark.parametrize(
        "error, status_code, message",
        [
            (DatabaseError("connection refused"), 500, "Database error"),
            (InvalidJSONError("expected value at line 1"), 400, "Invalid JSON format"),
            (RequestBodyError("client disconnected"), 400, "Request body error"),
            (NotFoundError(), 404, "Not Found"),
            (InternalError("no insert id"), 500, "Internal server error"),
        ],
    )
    def test_status_and_message(self, error, status_code, message):
        response = error_response(error)
        assert response.status_code == status_code
        assert body_of(response) == {"error": message}
        assert response.headers["content-type"] == "application/json"

    def test_detail_is_not_leaked(self):
        """Internal detail stays out of the response body."""
        response = error_response(DatabaseError("password authentication failed"))
        assert b"password" not in response.body

    def test_detail_is_logged(self, caplog):
        """Server-side failures log their detail."""
        with caplog.at_level("ERROR", logger="event_tracker.errors"):
            error_response(InternalError("Could not retrieve last insert ID"))
        assert "Could not retrieve last insert ID" in caplog.text

    def test_base_error_is_internal(self):
        """A bare AppError is reported as an internal failure."""
        response = error_response(AppError("unexpected"))
        assert response.status_code == 500
        assert body_of(response) == {"error": "Internal server error"}
