"""Gunicorn configuration file.

Usage:
    gunicorn -c gunicorn.conf.py "coursehub.flask_app:create_app()"

The application is loaded once in the master (preload_app) so every
worker shares the same configuration, including a JWT secret generated
in demo mode.
"""
import os

bind = f"0.0.0.0:{os.environ.get('PORT', '5000')}"
workers = int(os.environ.get("GUNICORN_WORKERS", "2"))
loglevel = os.environ.get("LOG_LEVEL", "info").lower()
preload_app = True
accesslog = "-"


def post_fork(server, worker):
    """
    Called just after a worker has been forked.

    SQLite connections are opened per call, so nothing inherited from
    the master needs to be reset here.
    """
    worker.log.info(f"Worker {worker.pid} ready")
