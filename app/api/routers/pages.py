from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import RedirectResponse, Response

from app.api.deps import get_cookie_storage, get_optional_user
from app.api.schemas.pages import (
    DashboardPageResponse,
    HomePageResponse,
    MessagePageResponse,
    PageUserResponse,
    PaymentPageResponse,
)
from app.application.use_cases.auth_common import LOGIN_PATH
from app.domain.entities.user import User
from app.infrastructure.session.cookie_storage import CookieSessionStorage
from app.shared.config import get_settings


router = APIRouter()

SAMPLE_PRODUCT_NAME = "Sample Product"
SAMPLE_PRICE_IN_CENTS = 1000


def _page_user(user: User) -> PageUserResponse:
    return PageUserResponse(id=user.id, email=user.email)


@router.get("/", response_model=HomePageResponse)
def home(
    response: Response,
    user: User | None = Depends(get_optional_user),
    storage: CookieSessionStorage = Depends(get_cookie_storage),
):
    storage.commit(response, secure=get_settings().auth_cookie_secure)
    if user is None:
        return HomePageResponse(
            authenticated=False,
            links={"login": LOGIN_PATH, "signup": "/auth/signup"},
        )
    return HomePageResponse(
        authenticated=True,
        user=_page_user(user),
        links={"dashboard": "/dashboard", "logout": "/auth/logout"},
    )


@router.get("/dashboard", response_model=DashboardPageResponse)
def dashboard(
    response: Response,
    user: User | None = Depends(get_optional_user),
    storage: CookieSessionStorage = Depends(get_cookie_storage),
):
    secure = get_settings().auth_cookie_secure
    if user is None:
        redirect = RedirectResponse(url=LOGIN_PATH, status_code=307)
        storage.commit(redirect, secure=secure)
        return redirect

    storage.commit(response, secure=secure)
    return DashboardPageResponse(
        user=_page_user(user),
        links={"payment": "/payment", "home": "/", "logout": "/auth/logout"},
    )


@router.get("/payment", response_model=PaymentPageResponse)
def payment():
    return PaymentPageResponse(
        product_name=SAMPLE_PRODUCT_NAME,
        price_in_cents=SAMPLE_PRICE_IN_CENTS,
        checkout_endpoint="/api/create-checkout",
    )


@router.get("/success", response_model=MessagePageResponse)
def success():
    return MessagePageResponse(
        status="success",
        message="Payment successful. Thank you for your purchase.",
        links={"dashboard": "/dashboard"},
    )


@router.get("/cancel", response_model=MessagePageResponse)
def cancel():
    return MessagePageResponse(
        status="cancelled",
        message="Payment cancelled. You have not been charged.",
        links={"payment": "/payment", "dashboard": "/dashboard"},
    )
