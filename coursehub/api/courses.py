"""Course routes.

Reads are public. Create, update and delete require the INSTRUCTOR
role; update and delete additionally require owning the course.
"""
from __future__ import annotations

from flask import Blueprint, jsonify

from coursehub.api.decorators import get_caller, require_auth, require_role
from coursehub.api.helpers import current_db, json_payload
from coursehub.core import catalog
from coursehub.core.models import Role

bp = Blueprint("courses", __name__, url_prefix="/courses")


@bp.route("", methods=["POST"])
@require_auth
@require_role(Role.INSTRUCTOR)
def create_course():
    course = catalog.create_course(current_db(), get_caller(), json_payload())
    return jsonify(course.to_dict())


@bp.route("", methods=["GET"])
def list_courses():
    return jsonify([course.to_dict() for course in catalog.list_courses(current_db())])


@bp.route("/<course_id>", methods=["GET"])
def get_course(course_id: str):
    course, lessons = catalog.get_course(current_db(), course_id)
    return jsonify(course.to_dict(lessons=lessons))


@bp.route("/<course_id>", methods=["PATCH"])
@require_auth
@require_role(Role.INSTRUCTOR)
def update_course(course_id: str):
    course = catalog.update_course(current_db(), get_caller(), course_id, json_payload())
    return jsonify(course.to_dict())


@bp.route("/<course_id>", methods=["DELETE"])
@require_auth
@require_role(Role.INSTRUCTOR)
def delete_course(course_id: str):
    catalog.delete_course(current_db(), get_caller(), course_id)
    return jsonify({"message": "Course deleted"})


@bp.route("/<course_id>/lessons", methods=["GET"])
def list_course_lessons(course_id: str):
    return jsonify([lesson.to_dict() for lesson in catalog.list_lessons(current_db(), course_id)])
