"""Pytest shared fixtures."""
import pathlib
import sys

# Add project root to Python path
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from coursehub.config.settings import AppConfig
from coursehub.core.store import Database
from coursehub.flask_app import create_app

TEST_SECRET = "test-jwt-secret-with-at-least-32-bytes!!"
# Cheap hash so signup/login tests stay fast
TEST_HASH_METHOD = "pbkdf2:sha256:1000"


def make_config(**overrides) -> AppConfig:
    base = dict(
        demo_mode=False,
        jwt_secret=TEST_SECRET,
        port=5000,
        max_content_length=65536,
        database_path=":memory:",
        password_hash_method=TEST_HASH_METHOD,
        log_level="INFO",
    )
    base.update(overrides)
    return AppConfig(**base)


@pytest.fixture()
def db_path(tmp_path):
    return str(tmp_path / "coursehub-test.db")


@pytest.fixture()
def db(db_path):
    database = Database(db_path)
    database.init_schema()
    return database


@pytest.fixture()
def app(db_path):
    flask_app = create_app(make_config(database_path=db_path))
    flask_app.config.update(TESTING=True)
    return flask_app


@pytest.fixture()
def client(app):
    with app.test_client() as client:
        yield client


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def signup(client, email: str, role: str, password: str = "pw123456", name: str = "Test User") -> tuple[str, str]:
    """Sign up through the API and return (account id, token)."""
    response = client.post(
        "/auth/signup",
        json={"email": email, "password": password, "name": name, "role": role},
    )
    assert response.status_code == 200, response.get_json()
    body = response.get_json()
    return body["id"], body["token"]


@pytest.fixture()
def instructor(client):
    return signup(client, "instructor@example.com", "INSTRUCTOR", name="Instructor")


@pytest.fixture()
def other_instructor(client):
    return signup(client, "rival@example.com", "INSTRUCTOR", name="Rival")


@pytest.fixture()
def student(client):
    return signup(client, "student@example.com", "STUDENT", name="Student")


@pytest.fixture()
def course(client, instructor):
    _, token = instructor
    response = client.post(
        "/courses",
        json={"title": "Python 101", "description": "Basics", "price": 49.0},
        headers=bearer(token),
    )
    assert response.status_code == 200
    return response.get_json()
