"""One-way password hashing backed by werkzeug.security."""
from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash


def hash_password(password: str, method: str = "scrypt") -> str:
    """Hash a plaintext password. The result embeds method and salt."""
    return generate_password_hash(password, method=method)


def verify_password(password_hash: str, password: str) -> bool:
    return check_password_hash(password_hash, password)
