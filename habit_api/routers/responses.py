"""Shared helpers turning service errors into JSON responses."""
from __future__ import annotations

from fastapi.responses import JSONResponse

from habit_api.services.errors import ServiceError, UnexpectedError


def error_response(exc: ServiceError) -> JSONResponse:
    body = {"message": exc.message}
    if isinstance(exc, UnexpectedError):
        body["error"] = exc.detail or ""
    return JSONResponse(body, status_code=exc.status_code)
