"""Purchase service."""
from __future__ import annotations
import logging
from typing import Any

from coursehub.core import validators
from coursehub.core.errors import AccessDeniedError, AlreadyPurchasedError, CourseNotFoundError
from coursehub.core.models import Course, Purchase
from coursehub.core.store import Database
from coursehub.core.tokens import TokenClaims

logger = logging.getLogger(__name__)


def purchase_course(db: Database, caller: TokenClaims, payload: Any) -> Purchase:
    """Record that the caller bought a course.

    The store inserts conditionally on the ``(user_id, course_id)``
    unique key, so two concurrent requests for the same pair still
    produce a single purchase.

    Raises:
        ValidationError: Payload rejected by the purchase schema
        CourseNotFoundError: No course with the given id
        AlreadyPurchasedError: Caller already owns the course
    """
    data = validators.validate_purchase_create(payload)
    course_id = data["courseId"]
    if db.get_course(course_id) is None:
        raise CourseNotFoundError()

    purchase = db.create_purchase(user_id=caller.account_id, course_id=course_id)
    if purchase is None:
        raise AlreadyPurchasedError()

    logger.info("Account %s purchased course %s", caller.account_id, course_id)
    return purchase


def list_purchases(db: Database, caller: TokenClaims, account_id: str) -> list[tuple[Purchase, Course]]:
    """Purchases of ``account_id``; callers may only list their own."""
    if account_id != caller.account_id:
        logger.warning("Account %s denied purchase list of %s", caller.account_id, account_id)
        raise AccessDeniedError()
    return db.list_purchases(account_id)
