"""
Flask decorators for authentication and authorization.

Request states: unauthenticated -> authenticated (``@require_auth``)
-> authorized (``@require_role``). Each guard raises an ``ApiError``
that the terminal handler in ``coursehub.api.errors`` renders; no guard
builds a response itself.

Usage:
    @bp.route("/courses", methods=["POST"])
    @require_auth
    @require_role(Role.INSTRUCTOR)
    def create_course():
        caller = get_caller()
"""

import logging
from functools import wraps
from typing import Optional

from flask import current_app, g, request

from coursehub.core.errors import (
    ForbiddenRoleError,
    InvalidTokenError,
    MissingCredentialError,
    MissingTokenError,
)
from coursehub.core.models import Role
from coursehub.core.tokens import TokenClaims, verify_token

logger = logging.getLogger(__name__)


def identify_caller() -> TokenClaims:
    """
    Read the bearer token from the Authorization header and verify it.

    Expected format: ``Authorization: Bearer <token>``

    Returns:
        TokenClaims: Verified caller identity, also stored on ``g.caller``

    Raises:
        MissingCredentialError: No Authorization header
        MissingTokenError: Header has no bearer token segment
        InvalidTokenError: Token failed verification
    """
    auth_header = request.headers.get("Authorization", "").strip()
    if not auth_header:
        logger.warning("Request to %s missing Authorization header", request.path)
        raise MissingCredentialError()

    scheme, _, token = auth_header.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        logger.warning("Request to %s without bearer token", request.path)
        raise MissingTokenError()

    cfg = current_app.config["APP_CONFIG"]
    try:
        claims = verify_token(token, cfg.jwt_secret)
    except InvalidTokenError:
        logger.warning("Request to %s with invalid token", request.path)
        raise

    g.caller = claims
    return claims


def require_auth(fn):
    """Decorator requiring a valid bearer token."""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        identify_caller()
        return fn(*args, **kwargs)

    return wrapper


def require_role(role: Role):
    """
    Decorator requiring the caller's role to equal ``role`` exactly.

    Must be applied below ``@require_auth``; a request without an
    identified caller is rejected the same way as a wrong role.
    """
    required = Role(role)

    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            caller = get_caller()
            if caller is None or caller.role != required:
                logger.warning(
                    "Request to %s lacks role %s (caller role: %s)",
                    request.path,
                    required.value,
                    caller.role.value if caller else None,
                )
                raise ForbiddenRoleError(required.value)
            return fn(*args, **kwargs)

        return wrapper
    return decorator


def get_caller() -> Optional[TokenClaims]:
    """
    Get the verified caller of the current request.

    Must be called after ``@require_auth``.

    Returns:
        TokenClaims, or None if no caller was identified
    """
    return g.get("caller")
