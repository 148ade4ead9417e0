"""Operator credential check for the report desk."""

import secrets

from civic_intake.config import get_settings


def verify_credentials(username: str, password: str) -> bool:
    """Check a username/password pair against the configured operator account."""
    settings = get_settings()
    username_ok = secrets.compare_digest(
        username.encode("utf-8"), settings.operator_username.encode("utf-8")
    )
    password_ok = secrets.compare_digest(
        password.encode("utf-8"), settings.operator_password.encode("utf-8")
    )
    return username_ok and password_ok
