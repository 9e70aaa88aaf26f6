"""
FastAPI application entry point.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from event_tracker.api import events
from event_tracker.errors import (
    AppError,
    DatabaseError,
    InternalError,
    InvalidJSONError,
    NotFoundError,
    error_response,
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Development Event Tracker API",
    description="Ingest and query development events",
    version="1.0.0",
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
    redirect_slashes=False,
)

app.include_router(events.router, tags=["events"])


@app.exception_handler(AppError)
async def handle_app_error(request: Request, exc: AppError):
    return error_response(exc)


@app.exception_handler(StarletteHTTPException)
async def handle_http_exception(request: Request, exc: StarletteHTTPException):
    # Unknown paths and known paths with an unsupported method are both "Not Found"
    if exc.status_code in (
        status.HTTP_404_NOT_FOUND,
        status.HTTP_405_METHOD_NOT_ALLOWED,
    ):
        return error_response(NotFoundError(f"{request.method} {request.url.path}"))
    return error_response(InternalError(f"HTTP {exc.status_code}: {exc.detail}"))


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    return error_response(InvalidJSONError(str(exc.errors())))


@app.exception_handler(SQLAlchemyError)
async def handle_database_error(request: Request, exc: SQLAlchemyError):
    return error_response(DatabaseError(str(exc)))


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception(f"[ERROR] Unhandled error on {request.method} {request.url.path}")
    return error_response(InternalError(repr(exc)))
