from types import SimpleNamespace

import jwt
import pytest
from flask import Flask, jsonify

from coursehub.api import decorators
from coursehub.api.decorators import get_caller, require_auth, require_role
from coursehub.api.errors import register_error_handlers
from coursehub.core.models import Role
from coursehub.core.tokens import issue_token

SECRET = "decorator-test-secret-with-32-bytes-min"


@pytest.fixture()
def flask_app():
    app = Flask(__name__)
    app.config.update(TESTING=True)
    app.config["APP_CONFIG"] = SimpleNamespace(jwt_secret=SECRET)
    register_error_handlers(app)

    @app.route("/whoami")
    @require_auth
    def whoami():
        caller = get_caller()
        return jsonify({"id": caller.account_id, "role": caller.role.value})

    @app.route("/instructors-only")
    @require_auth
    @require_role(Role.INSTRUCTOR)
    def instructors_only():
        return jsonify({"ok": True})

    @app.route("/role-without-auth")
    @require_role(Role.STUDENT)
    def role_without_auth():
        return jsonify({"ok": True})

    return app


@pytest.fixture()
def client(flask_app):
    with flask_app.test_client() as client:
        yield client


def token_for(account_id="acc-1", role=Role.STUDENT):
    return issue_token(account_id, role, SECRET)


def test_missing_authorization_header_returns_401(client):
    response = client.get("/whoami")
    body = response.get_json()
    assert response.status_code == 401
    assert body["error"] == "No token provided"


@pytest.mark.parametrize("header", ["Bearer", "Bearer   ", "Basic abc", "abc"])
def test_header_without_bearer_token_returns_401(client, header):
    response = client.get("/whoami", headers={"Authorization": header})
    assert response.status_code == 401
    assert response.get_json()["error"] == "Token missing"


def test_invalid_token_returns_403(client):
    response = client.get("/whoami", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 403
    assert response.get_json()["error"] == "Invalid token or expired token"


def test_token_signed_with_other_secret_returns_403(client):
    token = issue_token("acc-1", Role.STUDENT, "some-other-secret-with-32-bytes-min")
    response = client.get("/whoami", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 403


def test_valid_token_attaches_caller(client):
    response = client.get("/whoami", headers={"Authorization": f"Bearer {token_for('acc-9', Role.INSTRUCTOR)}"})
    assert response.status_code == 200
    assert response.get_json() == {"id": "acc-9", "role": "INSTRUCTOR"}


def test_scheme_is_case_insensitive(client):
    response = client.get("/whoami", headers={"Authorization": f"bearer {token_for()}"})
    assert response.status_code == 200


def test_wrong_role_returns_403(client):
    response = client.get("/instructors-only", headers={"Authorization": f"Bearer {token_for()}"})
    assert response.status_code == 403
    assert response.get_json()["error"] == "Access denied. Requires INSTRUCTOR role."


def test_matching_role_passes(client):
    token = token_for(role=Role.INSTRUCTOR)
    response = client.get("/instructors-only", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200


def test_role_guard_without_caller_is_forbidden(client):
    response = client.get("/role-without-auth")
    assert response.status_code == 403


def test_unknown_role_claim_is_invalid_token(client):
    token = jwt.encode({"userId": "acc-1", "role": "ADMIN"}, SECRET, algorithm="HS256")
    response = client.get("/instructors-only", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 403
    assert response.get_json()["error"] == "Invalid token or expired token"


def test_verification_uses_configured_secret(monkeypatch, client):
    seen = {}

    def fake_verify(token, secret):
        seen["secret"] = secret
        return decorators.TokenClaims(account_id="acc-1", role=Role.STUDENT)

    monkeypatch.setattr(decorators, "verify_token", fake_verify)
    response = client.get("/whoami", headers={"Authorization": "Bearer anything"})
    assert response.status_code == 200
    assert seen["secret"] == SECRET
