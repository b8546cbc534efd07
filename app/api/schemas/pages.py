from __future__ import annotations

from pydantic import BaseModel


class PageUserResponse(BaseModel):
    id: str
    email: str


class HomePageResponse(BaseModel):
    authenticated: bool
    user: PageUserResponse | None = None
    links: dict[str, str]


class DashboardPageResponse(BaseModel):
    user: PageUserResponse
    links: dict[str, str]


class PaymentPageResponse(BaseModel):
    product_name: str
    price_in_cents: int
    checkout_endpoint: str


class MessagePageResponse(BaseModel):
    status: str
    message: str
    links: dict[str, str]
