"""Signup and login routes."""
from __future__ import annotations

from flask import Blueprint, jsonify

from coursehub.api.helpers import current_config, current_db, json_payload
from coursehub.core import accounts

bp = Blueprint("auth", __name__, url_prefix="/auth")


@bp.route("/signup", methods=["POST"])
def signup():
    """Create an account and return a token for it (auto-login)."""
    cfg = current_config()
    account, token = accounts.signup(
        current_db(),
        json_payload(),
        cfg.jwt_secret,
        hash_method=cfg.password_hash_method,
    )
    return jsonify({"message": "User created", "token": token, "id": account.id})


@bp.route("/login", methods=["POST"])
def login():
    account, token = accounts.login(current_db(), json_payload(), current_config().jwt_secret)
    return jsonify({"token": token, "id": account.id})
