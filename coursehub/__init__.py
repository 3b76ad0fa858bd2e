"""Course marketplace backend.

To use the Flask app:
    from coursehub.flask_app import create_app

To use the services without Flask:
    from coursehub.core.store import Database
    from coursehub.core import accounts, catalog, purchases
"""
# Note: We don't import flask_app by default so that the core package
# stays importable without building an application
