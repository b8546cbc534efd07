from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class CreateCheckoutSessionInput:
    price_in_cents: int
    product_name: str
    success_url: str
    cancel_url: str


@dataclass(frozen=True)
class CreateSubscriptionSessionInput:
    price_id: str
    user_id: str
    customer_email: str | None
    success_url: str
    cancel_url: str


@dataclass(frozen=True)
class CheckoutSessionResult:
    url: str | None = None
    error: str | None = None

    def __post_init__(self) -> None:
        if (self.url is None) == (self.error is None):
            raise ValueError("exactly one of url or error must be set.")

    @classmethod
    def success(cls, url: str) -> CheckoutSessionResult:
        return cls(url=url)

    @classmethod
    def failure(cls, error: str) -> CheckoutSessionResult:
        return cls(error=error)


@dataclass(frozen=True)
class StripeCheckoutSessionResult:
    id: str
    url: str


@dataclass(frozen=True)
class SubscriptionInfo:
    id: str
    status: str
    customer_id: str | None
    user_id: str | None
    current_period_end: datetime | None
    cancel_at_period_end: bool


@dataclass(frozen=True)
class SubscriptionQueryInput:
    subscription_id: str
    user_id: str


@dataclass(frozen=True)
class StripeWebhookInput:
    signature: str
    payload: bytes


@dataclass(frozen=True)
class StripeWebhookEvent:
    event_id: str
    event_type: str
    object_id: str | None


@dataclass(frozen=True)
class StripeWebhookOutput:
    event_type: str
    handled: bool
