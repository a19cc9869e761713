"""Errors raised by use cases and rendered as field-keyed JSON bodies."""
from __future__ import annotations


class ApiError(Exception):
    status_code = 400

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__(errors)
        self.errors = errors


class ValidationFailed(ApiError):
    status_code = 400


class NotAuthorized(ApiError):
    status_code = 401


class NotFound(ApiError):
    status_code = 404
