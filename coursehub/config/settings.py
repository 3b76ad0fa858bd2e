"""Settings loader with environment variable and Docker secrets integration."""
from __future__ import annotations
import logging
import os
import secrets
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


def _load_secret_from_file(secret_name: str, env_var: str | None = None) -> str | None:
    """
    Load secret from /run/secrets (Docker secrets pattern).

    Priority:
    1. /run/secrets/{secret_name} (Docker secrets mount)
    2. Environment variable (fallback)

    Args:
        secret_name: Name of the secret file in /run/secrets
        env_var: Optional environment variable name to check as fallback

    Returns:
        Secret value or None if not found
    """
    secret_file = Path("/run/secrets") / secret_name

    # Priority 1: Read from /run/secrets
    if secret_file.exists() and secret_file.is_file():
        try:
            secret_value = secret_file.read_text().strip()
            if secret_value:
                logger.info("Loaded %s from /run/secrets", secret_name)
                return secret_value
        except OSError as e:
            logger.warning("Failed to read /run/secrets/%s: %s", secret_name, e)

    # Priority 2: Fallback to environment variable
    if env_var:
        secret_value = os.getenv(env_var)
        if secret_value:
            logger.info("Loaded %s from environment", env_var)
            return secret_value

    return None


@dataclass(frozen=True)
class AppConfig:
    """Application configuration container.

    Built once at startup and read-only afterwards.
    """
    # Mode
    demo_mode: bool

    # Credential service
    jwt_secret: str

    # HTTP
    port: int = 5000
    max_content_length: int = 65536

    # Persistence
    database_path: str = "coursehub.db"

    # Passwords
    password_hash_method: str = "scrypt"

    # Logging
    log_level: str = "INFO"

    # Werkzeug debugger for the dev server only
    debug: bool = False


def _get_int(var_name: str, default: int) -> int:
    """Read an integer environment variable."""
    raw = os.environ.get(var_name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"Environment variable {var_name} must be an integer, got {raw!r}.")


def _get_bool(var_name: str, default: bool = False) -> bool:
    return os.environ.get(var_name, str(default)).strip().lower() == "true"


def load_settings() -> AppConfig:
    """Load application settings from environment and /run/secrets."""
    demo_mode = _get_bool("DEMO_MODE")
    debug = _get_bool("FLASK_DEBUG")

    # JWT signing secret
    jwt_secret = _load_secret_from_file("jwt_secret", "JWT_SECRET")
    if not jwt_secret:
        if not demo_mode:
            raise RuntimeError("JWT_SECRET not found in /run/secrets or environment")
        # Tokens signed with a generated secret do not survive a restart
        jwt_secret = secrets.token_urlsafe(48)
        logger.warning("[demo-mode] Generated temporary JWT_SECRET")

    port = _get_int("PORT", 5000)
    max_content_length = _get_int("MAX_CONTENT_LENGTH", 65536)
    database_path = os.environ.get("DATABASE_PATH", "").strip() or "coursehub.db"
    password_hash_method = os.environ.get("PASSWORD_HASH_METHOD", "").strip() or "scrypt"
    log_level = (os.environ.get("LOG_LEVEL", "").strip() or "INFO").upper()

    mode_label = "DEMO" if demo_mode else "PRODUCTION"
    logger.info("Mode=%s; port=%s; database=%s", mode_label, port, database_path)

    return AppConfig(
        demo_mode=demo_mode,
        jwt_secret=jwt_secret,
        port=port,
        max_content_length=max_content_length,
        database_path=database_path,
        password_hash_method=password_hash_method,
        log_level=log_level,
        debug=debug,
    )
