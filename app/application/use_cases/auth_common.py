from __future__ import annotations

from app.domain.exceptions import AuthValidationError


MIN_PASSWORD_LENGTH = 6

DASHBOARD_PATH = "/dashboard"
HOME_PATH = "/"
LOGIN_PATH = "/auth/login"

MISSING_FIELDS_MESSAGE = "Please fill in all fields"
PASSWORD_TOO_SHORT_MESSAGE = f"Password must be at least {MIN_PASSWORD_LENGTH} characters"


def require_credentials(email: str | None, password: str | None) -> None:
    if not email or not password:
        raise AuthValidationError(MISSING_FIELDS_MESSAGE)


def require_password_length(password: str) -> None:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise AuthValidationError(PASSWORD_TOO_SHORT_MESSAGE)
