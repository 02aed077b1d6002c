"""Errors raised by the account and habit use cases."""

from __future__ import annotations

from typing import Optional


class ServiceError(Exception):
    """Base class; ``status_code`` is the HTTP status the API answers with."""

    status_code = 500

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail


class ValidationError(ServiceError):
    status_code = 400


class ConflictError(ServiceError):
    status_code = 400


class AuthError(ServiceError):
    status_code = 401


class NotFoundError(ServiceError):
    status_code = 404


class UnexpectedError(ServiceError):
    status_code = 500
