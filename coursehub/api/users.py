"""Routes about the calling account: profile and purchase history."""
from __future__ import annotations

from flask import Blueprint, jsonify

from coursehub.api.decorators import get_caller, require_auth
from coursehub.api.helpers import current_db
from coursehub.core import accounts, purchases

bp = Blueprint("users", __name__)


@bp.route("/me", methods=["GET"])
@require_auth
def me():
    account = accounts.get_profile(current_db(), get_caller())
    return jsonify(account.to_summary())


@bp.route("/users/<user_id>/purchases", methods=["GET"])
@require_auth
def list_user_purchases(user_id: str):
    """Purchases with nested course. Only the account itself may list them."""
    rows = purchases.list_purchases(current_db(), get_caller(), user_id)
    return jsonify([purchase.to_dict(course=course) for purchase, course in rows])
