"""Signup, login and /me flows."""
from conftest import TEST_SECRET, bearer, signup

from coursehub.core.models import Role
from coursehub.core.tokens import issue_token, verify_token


def test_signup_returns_token_for_new_account(client):
    response = client.post(
        "/auth/signup",
        json={"email": "a@x.com", "password": "pw123456", "name": "A", "role": "INSTRUCTOR"},
    )
    assert response.status_code == 200
    body = response.get_json()
    assert body["message"] == "User created"
    assert "password" not in body

    claims = verify_token(body["token"], TEST_SECRET)
    assert claims.account_id == body["id"]
    assert claims.role.value == "INSTRUCTOR"


def test_signup_then_login(client):
    account_id, _ = signup(client, "Learner@Example.com", "STUDENT")

    response = client.post("/auth/login", json={"email": "learner@example.com", "password": "pw123456"})
    assert response.status_code == 200
    body = response.get_json()
    assert body["id"] == account_id
    claims = verify_token(body["token"], TEST_SECRET)
    assert claims.account_id == account_id
    assert claims.role.value == "STUDENT"


def test_password_is_stored_hashed(client, app):
    account_id, _ = signup(client, "hash@example.com", "STUDENT", password="secret-pw")
    account = app.config["DATABASE"].get_account(account_id)
    assert account.password_hash != "secret-pw"
    assert "secret-pw" not in account.password_hash


def test_duplicate_email_conflicts(client):
    signup(client, "dup@example.com", "STUDENT")
    response = client.post(
        "/auth/signup",
        json={"email": "DUP@example.com", "password": "pw123456", "name": "B", "role": "INSTRUCTOR"},
    )
    assert response.status_code == 409
    assert response.get_json()["error"] == "Email already registered"


def test_signup_validation_error(client):
    response = client.post("/auth/signup", json={"email": "not-an-email", "password": "x", "role": "ADMIN"})
    assert response.status_code == 400
    body = response.get_json()
    assert body["statusCode"] == 400
    assert body["error"].startswith("Invalid request body:")


def test_signup_rejects_non_json_body(client):
    response = client.post("/auth/signup", data="email=a@x.com", content_type="application/x-www-form-urlencoded")
    assert response.status_code == 400


def test_login_failures_are_indistinguishable(client):
    signup(client, "known@example.com", "STUDENT")

    wrong_password = client.post("/auth/login", json={"email": "known@example.com", "password": "nope-nope"})
    unknown_user = client.post("/auth/login", json={"email": "ghost@example.com", "password": "pw123456"})

    assert wrong_password.status_code == unknown_user.status_code == 401
    assert wrong_password.get_json()["error"] == unknown_user.get_json()["error"] == "Invalid credentials"


def test_me_returns_summary(client):
    account_id, token = signup(client, "me@example.com", "STUDENT", name="Me")
    response = client.get("/me", headers=bearer(token))
    assert response.status_code == 200
    assert response.get_json() == {"id": account_id, "email": "me@example.com", "name": "Me", "role": "STUDENT"}


def test_me_requires_token(client):
    assert client.get("/me").status_code == 401


def test_me_for_missing_account_is_404(client):
    token = issue_token("no-such-account", Role.STUDENT, TEST_SECRET)
    response = client.get("/me", headers=bearer(token))
    assert response.status_code == 404
    assert response.get_json()["error"] == "User not found"
