"""Errors raised by the access layer and the services.

Every error carries the HTTP status it maps to; the terminal handler in
``coursehub.api.errors`` turns them into the JSON error envelope.
"""
from __future__ import annotations
from typing import Optional


class ApiError(Exception):
    """Base exception for all request failures with a known status."""

    status_code = 500
    message = "Internal Server Error"

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


# Authentication

class MissingCredentialError(ApiError):
    """No Authorization header on the request."""
    status_code = 401
    message = "No token provided"


class MissingTokenError(ApiError):
    """Authorization header without a bearer token segment."""
    status_code = 401
    message = "Token missing"


class InvalidTokenError(ApiError):
    """Token signature, structure or claims did not verify."""
    status_code = 403
    message = "Invalid token or expired token"


class InvalidCredentialsError(ApiError):
    """Unknown email or wrong password. Both cases share one message."""
    status_code = 401
    message = "Invalid credentials"


# Input

class ValidationError(ApiError):
    """Request payload rejected by its schema.

    Attributes:
        errors: list of ``"field: detail"`` strings
    """
    status_code = 400
    message = "Invalid request body"

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__(f"Invalid request body: {'; '.join(self.errors)}")


# Authorization

class ForbiddenRoleError(ApiError):
    status_code = 403

    def __init__(self, required_role: str):
        self.required_role = required_role
        super().__init__(f"Access denied. Requires {required_role} role.")


class NotAuthorizedError(ApiError):
    """Caller does not own the course (or the course does not exist)."""
    status_code = 403
    message = "Not authorized"


class AccessDeniedError(ApiError):
    status_code = 403
    message = "Access denied"


# Lookups and conflicts

class NotFoundError(ApiError):
    status_code = 404
    message = "Not found"


class AccountNotFoundError(NotFoundError):
    message = "User not found"


class CourseNotFoundError(NotFoundError):
    message = "Course not found"


class AlreadyPurchasedError(ApiError):
    status_code = 409
    message = "Course already purchased"


class EmailAlreadyRegisteredError(ApiError):
    status_code = 409
    message = "Email already registered"
