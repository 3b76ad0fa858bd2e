"""
Catalog service: courses and lessons.

Ownership rule for course update, course delete and lesson create:
the course is fetched once and its ``instructor_id`` must equal the
caller's account id. A missing course is reported exactly like a
foreign one (``NotAuthorizedError``), so non-owners learn nothing about
which ids exist. The public detail read reports a missing course as
``CourseNotFoundError`` instead.
"""
from __future__ import annotations
import logging
from typing import Any

from coursehub.core import validators
from coursehub.core.errors import CourseNotFoundError, NotAuthorizedError
from coursehub.core.models import Course, Lesson
from coursehub.core.store import Database
from coursehub.core.tokens import TokenClaims

logger = logging.getLogger(__name__)

UPDATE_DENIED = "Not authorized to update the course"
DELETE_DENIED = "Not authorized to delete this course"
LESSON_DENIED = "You do not own this course"


def _require_owned_course(db: Database, caller: TokenClaims, course_id: str, denied_message: str) -> Course:
    course = db.get_course(course_id)
    if course is None or course.instructor_id != caller.account_id:
        logger.warning("Account %s denied on course %s", caller.account_id, course_id)
        raise NotAuthorizedError(denied_message)
    return course


def create_course(db: Database, caller: TokenClaims, payload: Any) -> Course:
    data = validators.validate_course_create(payload)
    course = db.create_course(
        instructor_id=caller.account_id,
        title=data["title"],
        description=data.get("description"),
        price=data.get("price"),
    )
    logger.info("Course %s created by %s", course.id, caller.account_id)
    return course


def list_courses(db: Database) -> list[Course]:
    return db.list_courses()


def get_course(db: Database, course_id: str) -> tuple[Course, list[Lesson]]:
    """Course detail with its lessons.

    Raises:
        CourseNotFoundError: No course with this id
    """
    course = db.get_course(course_id)
    if course is None:
        raise CourseNotFoundError()
    return course, db.list_lessons(course_id)


def update_course(db: Database, caller: TokenClaims, course_id: str, payload: Any) -> Course:
    """Partially update a course owned by the caller.

    Raises:
        ValidationError: Payload rejected by the update schema
        NotAuthorizedError: Course missing or owned by someone else
    """
    data = validators.validate_course_update(payload)
    course = _require_owned_course(db, caller, course_id, UPDATE_DENIED)
    if not data:
        return course

    updated = db.update_course(course_id, data)
    if updated is None:
        # Deleted between the ownership read and the write
        raise NotAuthorizedError(UPDATE_DENIED)
    logger.info("Course %s updated (%s)", course_id, ", ".join(sorted(data)))
    return updated


def delete_course(db: Database, caller: TokenClaims, course_id: str) -> None:
    _require_owned_course(db, caller, course_id, DELETE_DENIED)
    db.delete_course(course_id)
    logger.info("Course %s deleted by %s", course_id, caller.account_id)


def create_lesson(db: Database, caller: TokenClaims, payload: Any) -> Lesson:
    data = validators.validate_lesson_create(payload)
    course = _require_owned_course(db, caller, data["courseId"], LESSON_DENIED)
    lesson = db.create_lesson(course_id=course.id, title=data["title"], content=data["content"])
    logger.info("Lesson %s added to course %s", lesson.id, course.id)
    return lesson


def list_lessons(db: Database, course_id: str) -> list[Lesson]:
    return db.list_lessons(course_id)
