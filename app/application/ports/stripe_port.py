from __future__ import annotations

from typing import Protocol

from app.application.dto.billing import (
    StripeCheckoutSessionResult,
    StripeWebhookEvent,
    SubscriptionInfo,
)


class StripePort(Protocol):
    def create_payment_checkout_session(
        self,
        *,
        price_in_cents: int,
        product_name: str,
        success_url: str,
        cancel_url: str,
    ) -> StripeCheckoutSessionResult:
        ...

    def create_subscription_checkout_session(
        self,
        *,
        price_id: str,
        user_id: str,
        customer_email: str | None,
        success_url: str,
        cancel_url: str,
    ) -> StripeCheckoutSessionResult:
        ...

    def retrieve_subscription(self, *, subscription_id: str) -> SubscriptionInfo:
        ...

    def cancel_subscription(self, *, subscription_id: str) -> SubscriptionInfo:
        ...

    def verify_webhook(self, *, signature: str, payload: bytes) -> StripeWebhookEvent:
        ...
