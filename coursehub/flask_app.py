"""Flask application factory and bootstrap.

This module provides the create_app() factory function for initializing
the Flask application with all blueprints, error handlers, logging and
the database.

Run locally:
    python -m coursehub.flask_app

Run with Gunicorn:
    gunicorn -c gunicorn.conf.py "coursehub.flask_app:create_app()"
"""
from __future__ import annotations
import logging
from typing import Optional

from flask import Flask

from coursehub.config import AppConfig, load_settings
from coursehub.core.store import Database

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


# ─────────────────────────────────────────────────────────────────────────────
# Application Factory
# ─────────────────────────────────────────────────────────────────────────────
def create_app(cfg: Optional[AppConfig] = None) -> Flask:
    """Create and configure Flask application.

    Args:
        cfg: Explicit configuration; loaded from the environment when omitted
    """
    if cfg is None:
        cfg = load_settings()

    _configure_logging(cfg.log_level)

    app = Flask(__name__)

    # Store config and store for easy access in routes
    app.config["APP_CONFIG"] = cfg
    app.config["MAX_CONTENT_LENGTH"] = cfg.max_content_length
    app.json.sort_keys = False

    db = Database(cfg.database_path)
    db.init_schema()
    app.config["DATABASE"] = db

    # Register blueprints
    from coursehub.api import auth, courses, errors, health, lessons, purchases, users

    app.register_blueprint(health.bp)
    app.register_blueprint(auth.bp)
    app.register_blueprint(users.bp)
    app.register_blueprint(courses.bp)
    app.register_blueprint(lessons.bp)
    app.register_blueprint(purchases.bp)

    # Register error handlers
    errors.register_error_handlers(app)

    mode_label = "DEMO" if cfg.demo_mode else "PRODUCTION"
    app.logger.info(f"Mode={mode_label}; database={cfg.database_path}")

    return app


def _configure_logging(level: str) -> None:
    """Configure root logging once; later calls only adjust the level."""
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT)
    root.setLevel(level)


if __name__ == "__main__":
    settings = load_settings()
    create_app(settings).run(host="0.0.0.0", port=settings.port, debug=settings.debug)
