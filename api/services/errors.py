"""Errors raised by entity services and translated to HTTP by the routers."""

from __future__ import annotations


class EntityError(Exception):
    """Base class for expected, caller-visible failures."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(EntityError):
    """Missing or malformed field."""

    status_code = 400


class InvalidCredentialsError(EntityError):
    status_code = 401


class NotFoundError(EntityError):
    status_code = 404


class ConflictError(EntityError):
    """Uniqueness or overlap rule violated."""

    status_code = 409
