from __future__ import annotations

from functools import lru_cache

from fastapi import Depends, HTTPException, Request

from app.application.ports.auth_port import AuthPort
from app.application.ports.stripe_port import StripePort
from app.application.use_cases.create_checkout_session import CreateCheckoutSessionUseCase
from app.application.use_cases.create_subscription_session import CreateSubscriptionSessionUseCase
from app.application.use_cases.get_current_user import GetCurrentUserUseCase
from app.application.use_cases.manage_subscription import (
    CancelSubscriptionUseCase,
    GetSubscriptionUseCase,
)
from app.application.use_cases.process_stripe_webhook import ProcessStripeWebhookUseCase
from app.application.use_cases.sign_in import SignInUseCase
from app.application.use_cases.sign_out import SignOutUseCase
from app.application.use_cases.sign_up import SignUpUseCase
from app.domain.entities.user import User
from app.infrastructure.session.cookie_storage import CookieSessionStorage
from app.shared.config import get_settings


def get_cookie_storage(request: Request) -> CookieSessionStorage:
    settings = get_settings()
    return CookieSessionStorage(cookies=request.cookies, prefix=settings.auth_cookie_prefix)


def get_auth_port(storage: CookieSessionStorage = Depends(get_cookie_storage)) -> AuthPort:
    from app.infrastructure.clients.supabase_auth_client import SupabaseAuthClient

    settings = get_settings()
    if not settings.supabase_url or not settings.supabase_anon_key:
        raise HTTPException(status_code=500, detail="SUPABASE_URL and SUPABASE_ANON_KEY are required.")
    return SupabaseAuthClient(
        supabase_url=settings.supabase_url,
        supabase_key=settings.supabase_anon_key,
        storage=storage,
    )


@lru_cache(maxsize=1)
def _get_stripe_client() -> StripePort:
    from app.infrastructure.clients.stripe_client import StripeClient

    settings = get_settings()
    if not settings.stripe_secret_key:
        raise HTTPException(status_code=500, detail="STRIPE_SECRET_KEY is required.")
    return StripeClient(
        secret_key=settings.stripe_secret_key,
        webhook_secret=settings.stripe_webhook_secret,
        api_version=settings.stripe_api_version,
        currency=settings.stripe_currency,
    )


def get_stripe_port() -> StripePort:
    return _get_stripe_client()


def get_webhook_stripe_port(stripe_port: StripePort = Depends(get_stripe_port)) -> StripePort:
    if not get_settings().stripe_webhook_secret:
        raise HTTPException(status_code=500, detail="STRIPE_WEBHOOK_SECRET is required.")
    return stripe_port


def get_sign_up_use_case(auth_port: AuthPort = Depends(get_auth_port)) -> SignUpUseCase:
    return SignUpUseCase(auth_port=auth_port)


def get_sign_in_use_case(auth_port: AuthPort = Depends(get_auth_port)) -> SignInUseCase:
    return SignInUseCase(auth_port=auth_port)


def get_sign_out_use_case(auth_port: AuthPort = Depends(get_auth_port)) -> SignOutUseCase:
    return SignOutUseCase(auth_port=auth_port)


def get_get_current_user_use_case(auth_port: AuthPort = Depends(get_auth_port)) -> GetCurrentUserUseCase:
    return GetCurrentUserUseCase(auth_port=auth_port)


def get_create_checkout_session_use_case(
    stripe_port: StripePort = Depends(get_stripe_port),
) -> CreateCheckoutSessionUseCase:
    return CreateCheckoutSessionUseCase(stripe_port=stripe_port)


def get_create_subscription_session_use_case(
    stripe_port: StripePort = Depends(get_stripe_port),
) -> CreateSubscriptionSessionUseCase:
    return CreateSubscriptionSessionUseCase(stripe_port=stripe_port)


def get_get_subscription_use_case(
    stripe_port: StripePort = Depends(get_stripe_port),
) -> GetSubscriptionUseCase:
    return GetSubscriptionUseCase(stripe_port=stripe_port)


def get_cancel_subscription_use_case(
    stripe_port: StripePort = Depends(get_stripe_port),
) -> CancelSubscriptionUseCase:
    return CancelSubscriptionUseCase(stripe_port=stripe_port)


def get_process_stripe_webhook_use_case(
    stripe_port: StripePort = Depends(get_webhook_stripe_port),
) -> ProcessStripeWebhookUseCase:
    return ProcessStripeWebhookUseCase(stripe_port=stripe_port)


def get_optional_user(
    use_case: GetCurrentUserUseCase = Depends(get_get_current_user_use_case),
) -> User | None:
    return use_case.execute()


def get_current_user(user: User | None = Depends(get_optional_user)) -> User:
    if user is None:
        raise HTTPException(status_code=401, detail="Not authenticated.")
    return user
