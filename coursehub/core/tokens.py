"""
Credential service: bearer token issuance and verification.

Tokens are HS256 JWTs signed with the configured secret and carry the
claim bundle ``{userId, role}`` plus ``iat``.

Security:
- Only HS256 is accepted on verification (no ``alg`` downgrade)
- No expiry is set; tokens stay valid until the secret changes
- Claims are validated once here and handed out as ``TokenClaims``
"""
from __future__ import annotations
import logging
import time
from dataclasses import dataclass

import jwt
from jwt.exceptions import DecodeError, InvalidSignatureError, InvalidTokenError as JWTInvalidTokenError

from coursehub.core.errors import InvalidTokenError
from coursehub.core.models import Role

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


@dataclass(frozen=True)
class TokenClaims:
    """Verified claim bundle of a bearer token."""
    account_id: str
    role: Role

    @classmethod
    def from_payload(cls, payload: dict) -> "TokenClaims":
        """Build claims from a decoded JWT payload.

        Raises:
            InvalidTokenError: If ``userId`` or ``role`` is missing or malformed
        """
        account_id = payload.get("userId")
        if not isinstance(account_id, str) or not account_id:
            raise InvalidTokenError()
        try:
            role = Role(payload.get("role"))
        except ValueError:
            raise InvalidTokenError()
        return cls(account_id=account_id, role=role)


def issue_token(account_id: str, role: Role, secret: str) -> str:
    """Sign a token for the given account.

    Args:
        account_id: Account identifier (``userId`` claim)
        role: Account role (``role`` claim)
        secret: HMAC signing secret from ``AppConfig.jwt_secret``

    Returns:
        str: Compact JWT
    """
    payload = {
        "userId": account_id,
        "role": Role(role).value,
        "iat": int(time.time()),
    }
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def verify_token(token: str, secret: str) -> TokenClaims:
    """
    Verify a bearer token and return its claims.

    Args:
        token: JWT string (without "Bearer " prefix)
        secret: HMAC signing secret from ``AppConfig.jwt_secret``

    Returns:
        TokenClaims: Verified account id and role

    Raises:
        InvalidTokenError: Bad signature, malformed token or bad claims
    """
    try:
        payload = jwt.decode(token, secret, algorithms=[ALGORITHM])
    except InvalidSignatureError:
        logger.debug("Token rejected: invalid signature")
        raise InvalidTokenError()
    except DecodeError as e:
        logger.debug("Token rejected: malformed JWT (%s)", e)
        raise InvalidTokenError()
    except JWTInvalidTokenError as e:
        logger.debug("Token rejected: %s", e)
        raise InvalidTokenError()

    return TokenClaims.from_payload(payload)
