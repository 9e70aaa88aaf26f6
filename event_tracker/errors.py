"""
Error taxonomy and its mapping to HTTP responses.

Every failure that reaches a client is one of the `ErrorKind` members.
Each kind maps to a fixed status code and a generic message; the
underlying detail only goes to the log.
"""

import logging
from enum import Enum
from typing import Optional

from fastapi import status
from fastapi.responses import JSONResponse

from event_tracker.domain.events import ErrorResponse

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    """Closed set of failure kinds."""

    DATABASE = "database"
    INVALID_JSON = "invalid_json"
    REQUEST_BODY = "request_body"
    NOT_FOUND = "not_found"
    INTERNAL = "internal"


ERROR_RESPONSES = {
    ErrorKind.DATABASE: (status.HTTP_500_INTERNAL_SERVER_ERROR, "Database error"),
    ErrorKind.INVALID_JSON: (status.HTTP_400_BAD_REQUEST, "Invalid JSON format"),
    ErrorKind.REQUEST_BODY: (status.HTTP_400_BAD_REQUEST, "Request body error"),
    ErrorKind.NOT_FOUND: (status.HTTP_404_NOT_FOUND, "Not Found"),
    ErrorKind.INTERNAL: (
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal server error",
    ),
}

_unmapped = set(ErrorKind) - set(ERROR_RESPONSES)
if _unmapped:
    raise RuntimeError(f"Error kinds without a response mapping: {_unmapped}")


class AppError(Exception):
    """Base class for every failure the service reports to clients."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail or self.kind.value)
        self.detail = detail


class DatabaseError(AppError):
    kind = ErrorKind.DATABASE


class InvalidJSONError(AppError):
    kind = ErrorKind.INVALID_JSON


class RequestBodyError(AppError):
    kind = ErrorKind.REQUEST_BODY


class NotFoundError(AppError):
    kind = ErrorKind.NOT_FOUND


class InternalError(AppError):
    kind = ErrorKind.INTERNAL


def error_response(error: AppError) -> JSONResponse:
    """
    Convert an AppError into its JSON error envelope.

    Args:
        error: The failure to report

    Returns:
        JSONResponse with the kind's status code and `{"error": <message>}`
    """
    status_code, message = ERROR_RESPONSES[error.kind]

    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(f"[ERROR] {error.kind.value}: {error}")
    elif error.kind is not ErrorKind.NOT_FOUND:
        logger.warning(f"[ERROR] {error.kind.value}: {error}")

    return JSONResponse(
        status_code=status_code, content=ErrorResponse(error=message).model_dump()
    )
