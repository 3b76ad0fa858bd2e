"""Account service: signup, login and the caller's profile."""
from __future__ import annotations
import logging
from typing import Any

from coursehub.core import validators
from coursehub.core.errors import (
    AccountNotFoundError,
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
)
from coursehub.core.models import Account
from coursehub.core.passwords import hash_password, verify_password
from coursehub.core.store import Database
from coursehub.core.tokens import TokenClaims, issue_token

logger = logging.getLogger(__name__)


def signup(db: Database, payload: Any, secret: str, hash_method: str = "scrypt") -> tuple[Account, str]:
    """Create an account and log it in.

    The plaintext password is hashed before it reaches the store and is
    never returned.

    Returns:
        (account, token) for the new account

    Raises:
        ValidationError: Payload rejected by the signup schema
        EmailAlreadyRegisteredError: Email already belongs to an account
    """
    data = validators.validate_signup(payload)
    account = db.create_account(
        email=data["email"],
        password_hash=hash_password(data["password"], method=hash_method),
        name=data["name"],
        role=data["role"],
    )
    if account is None:
        logger.info("Signup rejected: email already registered")
        raise EmailAlreadyRegisteredError()

    logger.info("Account %s created with role %s", account.id, account.role.value)
    return account, issue_token(account.id, account.role, secret)


def login(db: Database, payload: Any, secret: str) -> tuple[Account, str]:
    """Exchange email and password for a token.

    Unknown email and wrong password raise the same error.
    """
    data = validators.validate_login(payload)
    account = db.get_account_by_email(data["email"])
    if account is None or not verify_password(account.password_hash, data["password"]):
        logger.warning("Login failed")
        raise InvalidCredentialsError()

    logger.info("Account %s logged in", account.id)
    return account, issue_token(account.id, account.role, secret)


def get_profile(db: Database, caller: TokenClaims) -> Account:
    account = db.get_account(caller.account_id)
    if account is None:
        raise AccountNotFoundError()
    return account
