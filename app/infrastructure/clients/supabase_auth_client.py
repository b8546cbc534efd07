from __future__ import annotations

from supabase import create_client
from supabase.client import ClientOptions
from supabase_auth.errors import AuthSessionMissingError as SessionMissing

from app.application.ports.auth_port import AuthPort
from app.domain.entities.user import User
from app.domain.exceptions import AuthProviderError, AuthSessionMissingError
from app.infrastructure.session.cookie_storage import CookieSessionStorage


class SupabaseAuthClient(AuthPort):
    """Supabase Auth bound to one request's cookie storage."""

    def __init__(self, *, supabase_url: str, supabase_key: str, storage: CookieSessionStorage):
        self._client = create_client(
            supabase_url,
            supabase_key,
            options=ClientOptions(
                storage=storage,
                auto_refresh_token=False,
                persist_session=True,
            ),
        )

    def sign_up(self, *, email: str, password: str) -> None:
        try:
            self._client.auth.sign_up({"email": email, "password": password})
        except Exception as exc:  # pragma: no cover - external API
            raise AuthProviderError(_message(exc)) from exc

    def sign_in_with_password(self, *, email: str, password: str) -> None:
        try:
            self._client.auth.sign_in_with_password({"email": email, "password": password})
        except Exception as exc:
            raise AuthProviderError(_message(exc)) from exc

    def sign_out(self) -> None:
        try:
            self._client.auth.sign_out()
        except Exception as exc:  # pragma: no cover - external API
            raise AuthProviderError(_message(exc)) from exc

    def get_user(self) -> User | None:
        try:
            response = self._client.auth.get_user()
        except SessionMissing as exc:
            raise AuthSessionMissingError(_message(exc)) from exc
        except Exception as exc:
            raise AuthProviderError(_message(exc)) from exc

        user = getattr(response, "user", None)
        if user is None:
            return None
        return User(id=str(user.id), email=str(getattr(user, "email", "") or ""))


def _message(exc: Exception) -> str:
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(exc) or exc.__class__.__name__
