from __future__ import annotations

from datetime import datetime, timezone
import logging

import stripe

from app.application.dto.billing import (
    StripeCheckoutSessionResult,
    StripeWebhookEvent,
    SubscriptionInfo,
)
from app.application.ports.stripe_port import StripePort
from app.domain.exceptions import (
    PaymentProviderError,
    SubscriptionNotFoundError,
    WebhookVerificationError,
)


logger = logging.getLogger(__name__)


GENERIC_CHECKOUT_ERROR = "Unable to create checkout session."
GENERIC_SUBSCRIPTION_ERROR = "Unable to load subscription."


class StripeClient(StripePort):
    def __init__(
        self,
        *,
        secret_key: str,
        webhook_secret: str,
        api_version: str,
        currency: str = "usd",
    ):
        stripe.api_key = secret_key
        stripe.api_version = api_version
        self._webhook_secret = webhook_secret
        self._currency = currency

    def create_payment_checkout_session(
        self,
        *,
        price_in_cents: int,
        product_name: str,
        success_url: str,
        cancel_url: str,
    ) -> StripeCheckoutSessionResult:
        payload: dict = {
            "payment_method_types": ["card"],
            "line_items": [
                {
                    "price_data": {
                        "currency": self._currency,
                        "product_data": {"name": product_name},
                        "unit_amount": price_in_cents,
                    },
                    "quantity": 1,
                }
            ],
            "mode": "payment",
            "success_url": success_url,
            "cancel_url": cancel_url,
        }
        return self._create_session(payload)

    def create_subscription_checkout_session(
        self,
        *,
        price_id: str,
        user_id: str,
        customer_email: str | None,
        success_url: str,
        cancel_url: str,
    ) -> StripeCheckoutSessionResult:
        payload: dict = {
            "payment_method_types": ["card"],
            "line_items": [{"price": price_id, "quantity": 1}],
            "mode": "subscription",
            "success_url": success_url,
            "cancel_url": cancel_url,
            "client_reference_id": user_id,
            "subscription_data": {"metadata": {"user_id": user_id}},
        }
        if customer_email:
            payload["customer_email"] = customer_email
        return self._create_session(payload)

    def retrieve_subscription(self, *, subscription_id: str) -> SubscriptionInfo:
        try:
            subscription = stripe.Subscription.retrieve(subscription_id)
        except Exception as exc:
            raise _subscription_error(exc) from exc
        return _to_subscription_info(subscription)

    def cancel_subscription(self, *, subscription_id: str) -> SubscriptionInfo:
        try:
            subscription = stripe.Subscription.cancel(subscription_id)
        except Exception as exc:
            raise _subscription_error(exc) from exc
        return _to_subscription_info(subscription)

    def verify_webhook(self, *, signature: str, payload: bytes) -> StripeWebhookEvent:
        try:
            event = stripe.Webhook.construct_event(payload=payload, sig_header=signature, secret=self._webhook_secret)
        except Exception as exc:
            logger.warning("stripe_client: webhook_verification_failed reason=%s", exc)
            raise WebhookVerificationError("Invalid webhook signature") from exc

        data_object = event.get("data", {}).get("object", {})
        object_id = data_object.get("id")
        return StripeWebhookEvent(
            event_id=str(event.get("id", "")),
            event_type=str(event.get("type", "")),
            object_id=str(object_id) if object_id else None,
        )

    def _create_session(self, payload: dict) -> StripeCheckoutSessionResult:
        try:
            session = stripe.checkout.Session.create(**payload)
        except Exception as exc:
            raise PaymentProviderError(_public_message(exc, GENERIC_CHECKOUT_ERROR)) from exc

        session_id = getattr(session, "id", None)
        session_url = getattr(session, "url", None)
        if not session_id or not session_url:
            raise PaymentProviderError("Stripe checkout session response is incomplete.")

        return StripeCheckoutSessionResult(id=str(session_id), url=str(session_url))


def _public_message(exc: Exception, fallback: str) -> str:
    # Only card errors carry text written for the payer; everything else stays in the log.
    logger.error("stripe_client: request_failed error=%s reason=%s", exc.__class__.__name__, exc)
    if isinstance(exc, stripe.CardError) and exc.user_message:
        return str(exc.user_message)
    return fallback


def _subscription_error(exc: Exception) -> Exception:
    if isinstance(exc, stripe.InvalidRequestError) and (
        exc.code == "resource_missing" or exc.http_status == 404
    ):
        logger.info("stripe_client: subscription_missing reason=%s", exc)
        return SubscriptionNotFoundError("Subscription not found.")
    return PaymentProviderError(_public_message(exc, GENERIC_SUBSCRIPTION_ERROR))


def _to_subscription_info(subscription) -> SubscriptionInfo:
    metadata = subscription.get("metadata") or {}
    user_id = metadata.get("user_id")
    customer_id = subscription.get("customer")
    return SubscriptionInfo(
        id=str(subscription.get("id")),
        status=str(subscription.get("status")),
        customer_id=str(customer_id) if customer_id else None,
        user_id=str(user_id) if user_id else None,
        current_period_end=_to_datetime(subscription.get("current_period_end")),
        cancel_at_period_end=bool(subscription.get("cancel_at_period_end", False)),
    )


def _to_datetime(value: int | None) -> datetime | None:
    if value is None:
        return None
    return datetime.fromtimestamp(int(value), tz=timezone.utc)
