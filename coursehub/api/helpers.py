"""Request-scoped accessors shared by the blueprints."""
from __future__ import annotations
from typing import Any

from flask import current_app, request

from coursehub.config import AppConfig
from coursehub.core.store import Database


def current_config() -> AppConfig:
    return current_app.config["APP_CONFIG"]


def current_db() -> Database:
    return current_app.config["DATABASE"]


def json_payload() -> Any:
    """Parsed JSON body, or None when the body is missing or not JSON.

    Shape checks are left to the validators.
    """
    return request.get_json(silent=True)
