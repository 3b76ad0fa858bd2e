"""Input validation for request payloads.

Field helpers raise ``ValueError``; the ``validate_*`` schema functions
collect those into a single ``ValidationError`` and return a cleaned
dict.
"""
from __future__ import annotations
import math
from typing import Any, Callable

from coursehub.core.errors import ValidationError
from coursehub.core.models import Role

_MISSING = object()

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 5000
CONTENT_MAX_LENGTH = 50000
PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_LENGTH = 128


def validate_email(email: Any) -> str:
    """Validate email address.

    Args:
        email: Email address to validate

    Returns:
        Normalized email address

    Raises:
        ValueError: If email is invalid
    """
    if not isinstance(email, str):
        raise ValueError("Invalid email format")
    email = email.strip().lower()
    if not email or "@" not in email:
        raise ValueError("Invalid email format")

    local, domain = email.rsplit("@", 1)
    if not local or not domain or "." not in domain:
        raise ValueError("Invalid email format")
    if len(email) > 254:
        raise ValueError("Email exceeds maximum length")

    return email


def validate_name(name: Any, field: str) -> str:
    """Validate a display name.

    Args:
        name: Name to validate
        field: Field name for error messages (e.g., "Name")

    Returns:
        Trimmed name

    Raises:
        ValueError: If name is invalid
    """
    if not isinstance(name, str):
        raise ValueError(f"{field} must be a string")
    name = name.strip()
    if not name:
        raise ValueError(f"{field} is required")
    if len(name) > 128:
        raise ValueError(f"{field} exceeds maximum length")

    # Prevent injection attacks
    if any(char in name for char in "<>\"'`;&|$"):
        raise ValueError(f"{field} contains invalid characters")

    return name


def validate_password(password: Any) -> str:
    if not isinstance(password, str):
        raise ValueError("Password must be a string")
    if len(password) < PASSWORD_MIN_LENGTH:
        raise ValueError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")
    if len(password) > PASSWORD_MAX_LENGTH:
        raise ValueError(f"Password must not exceed {PASSWORD_MAX_LENGTH} characters")
    return password


def validate_login_password(password: Any) -> str:
    """Login only checks presence; length rules apply at signup."""
    if not isinstance(password, str) or not password:
        raise ValueError("Password is required")
    if len(password) > PASSWORD_MAX_LENGTH:
        raise ValueError(f"Password must not exceed {PASSWORD_MAX_LENGTH} characters")
    return password


def validate_role(role: Any) -> Role:
    try:
        return Role(role)
    except ValueError:
        allowed = ", ".join(r.value for r in Role)
        raise ValueError(f"Role must be one of: {allowed}")


def validate_text(value: Any, field: str, max_length: int, required: bool = True) -> str:
    """Validate a free-text field and return it trimmed."""
    if not isinstance(value, str):
        raise ValueError(f"{field} must be a string")
    value = value.strip()
    if required and not value:
        raise ValueError(f"{field} is required")
    if len(value) > max_length:
        raise ValueError(f"{field} must not exceed {max_length} characters")
    return value


def validate_price(price: Any) -> float:
    # bool is an int subclass
    if isinstance(price, bool) or not isinstance(price, (int, float)):
        raise ValueError("Price must be a number")
    # The JSON parser accepts NaN and Infinity literals
    if not math.isfinite(price):
        raise ValueError("Price must be a finite number")
    if price < 0:
        raise ValueError("Price must not be negative")
    return float(price)


def validate_identifier(value: Any, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{field} is required")
    return value.strip()


# ─────────────────────────────────────────────────────────────────────────────
# Schemas
# ─────────────────────────────────────────────────────────────────────────────

def _apply_schema(
    payload: Any,
    fields: dict[str, tuple[Callable[[Any], Any], bool]],
    allow_unknown: bool = True,
    nullable: tuple[str, ...] | None = None,
) -> dict:
    """Run field validators against a payload.

    ``fields`` maps payload keys to ``(validator, required)``. Optional
    fields that are absent are left out of the result.

    Without ``nullable`` an explicit ``null`` counts as absent. With it,
    ``null`` is kept as ``None`` for the listed keys and rejected for
    every other key.
    """
    if not isinstance(payload, dict):
        raise ValidationError(["body: Request body must be a JSON object"])

    errors = []
    cleaned = {}
    for key, (validator, required) in fields.items():
        value = payload.get(key, _MISSING)
        if value is None and nullable is not None:
            if key in nullable:
                cleaned[key] = None
            else:
                errors.append(f"{key}: Must not be null")
            continue
        if value is _MISSING or value is None:
            if required:
                errors.append(f"{key}: Required")
            continue
        try:
            cleaned[key] = validator(value)
        except ValueError as exc:
            errors.append(f"{key}: {exc}")

    if not allow_unknown:
        for key in sorted(set(payload) - set(fields)):
            errors.append(f"{key}: Unknown field")

    if errors:
        raise ValidationError(errors)
    return cleaned


def validate_signup(payload: Any) -> dict:
    return _apply_schema(payload, {
        "email": (validate_email, True),
        "password": (validate_password, True),
        "name": (lambda value: validate_name(value, "Name"), True),
        "role": (validate_role, True),
    })


def validate_login(payload: Any) -> dict:
    return _apply_schema(payload, {
        "email": (validate_email, True),
        "password": (validate_login_password, True),
    })


def _course_fields(title_required: bool) -> dict:
    return {
        "title": (lambda value: validate_text(value, "Title", TITLE_MAX_LENGTH), title_required),
        "description": (
            lambda value: validate_text(value, "Description", DESCRIPTION_MAX_LENGTH, required=False),
            False,
        ),
        "price": (validate_price, False),
    }


def validate_course_create(payload: Any) -> dict:
    return _apply_schema(payload, _course_fields(title_required=True))


def validate_course_update(payload: Any) -> dict:
    """Partial update: every field optional, unknown fields rejected.

    ``null`` clears ``description`` or ``price``; the title cannot be
    cleared.
    """
    return _apply_schema(
        payload,
        _course_fields(title_required=False),
        allow_unknown=False,
        nullable=("description", "price"),
    )


def validate_lesson_create(payload: Any) -> dict:
    return _apply_schema(payload, {
        "title": (lambda value: validate_text(value, "Title", TITLE_MAX_LENGTH), True),
        "content": (
            lambda value: validate_text(value, "Content", CONTENT_MAX_LENGTH, required=False),
            True,
        ),
        "courseId": (lambda value: validate_identifier(value, "courseId"), True),
    })


def validate_purchase_create(payload: Any) -> dict:
    return _apply_schema(payload, {
        "courseId": (lambda value: validate_identifier(value, "courseId"), True),
    })
