from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


def _bool(name: str, default: bool = False) -> bool:
    value = _env(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _list(name: str, default: str = "") -> list[str]:
    value = _env(name, default) or ""
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    app_url: str
    supabase_url: str
    supabase_anon_key: str
    stripe_secret_key: str
    stripe_webhook_secret: str
    stripe_api_version: str
    stripe_currency: str
    auth_cookie_prefix: str
    auth_cookie_secure: bool
    log_level: str
    cors_allow_origins: list[str]

    def absolute_url(self, path: str) -> str:
        return f"{self.app_url.rstrip('/')}{path}"


def get_settings() -> Settings:
    return Settings(
        app_url=_env("APP_URL", "http://localhost:8000"),
        supabase_url=_env("SUPABASE_URL", ""),
        supabase_anon_key=_env("SUPABASE_ANON_KEY", ""),
        stripe_secret_key=_env("STRIPE_SECRET_KEY", ""),
        stripe_webhook_secret=_env("STRIPE_WEBHOOK_SECRET", ""),
        stripe_api_version=_env("STRIPE_API_VERSION", "2023-10-16"),
        stripe_currency=_env("STRIPE_CURRENCY", "usd"),
        auth_cookie_prefix=_env("AUTH_COOKIE_PREFIX", "sb"),
        auth_cookie_secure=_bool("AUTH_COOKIE_SECURE", False),
        log_level=(_env("LOG_LEVEL", "INFO") or "INFO").upper(),
        cors_allow_origins=_list("CORS_ALLOW_ORIGINS", "*"),
    )
