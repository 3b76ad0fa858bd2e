"""Lesson routes."""
from __future__ import annotations

from flask import Blueprint, jsonify

from coursehub.api.decorators import get_caller, require_auth, require_role
from coursehub.api.helpers import current_db, json_payload
from coursehub.core import catalog
from coursehub.core.models import Role

bp = Blueprint("lessons", __name__, url_prefix="/lessons")


@bp.route("", methods=["POST"])
@require_auth
@require_role(Role.INSTRUCTOR)
def create_lesson():
    """Add a lesson to a course owned by the caller."""
    lesson = catalog.create_lesson(current_db(), get_caller(), json_payload())
    return jsonify(lesson.to_dict())
