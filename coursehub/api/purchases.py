"""Purchase routes."""
from __future__ import annotations

from flask import Blueprint, jsonify

from coursehub.api.decorators import get_caller, require_auth, require_role
from coursehub.api.helpers import current_db, json_payload
from coursehub.core import purchases
from coursehub.core.models import Role

bp = Blueprint("purchases", __name__, url_prefix="/purchases")


@bp.route("", methods=["POST"])
@require_auth
@require_role(Role.STUDENT)
def create_purchase():
    purchase = purchases.purchase_course(current_db(), get_caller(), json_payload())
    return jsonify({"message": "Course purchased successfully", "purchaseId": purchase.id})
