from __future__ import annotations

from datetime import datetime, timezone

import stripe
from fastapi.testclient import TestClient

from app.api.deps import (
    _get_stripe_client,
    get_current_user,
    get_stripe_port,
    get_webhook_stripe_port,
)
from app.application.dto.billing import (
    StripeCheckoutSessionResult,
    StripeWebhookEvent,
    SubscriptionInfo,
)
from app.domain.entities.user import User
from app.domain.exceptions import PaymentProviderError, WebhookVerificationError
from app.infrastructure.clients.stripe_client import GENERIC_CHECKOUT_ERROR, StripeClient
from app.main import app


CHECKOUT_URL = "https://checkout.stripe.com/c/pay/cs_test_1"


class FakeStripePort:
    def __init__(self, *, error: Exception | None = None, subscription_owner: str = "user-1"):
        self.error = error
        self.subscription_owner = subscription_owner
        self.calls: list[dict] = []

    def create_payment_checkout_session(self, **kwargs) -> StripeCheckoutSessionResult:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return StripeCheckoutSessionResult(id="cs_test_1", url=CHECKOUT_URL)

    def create_subscription_checkout_session(self, **kwargs) -> StripeCheckoutSessionResult:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return StripeCheckoutSessionResult(id="cs_test_2", url=CHECKOUT_URL)

    def retrieve_subscription(self, *, subscription_id: str) -> SubscriptionInfo:
        return SubscriptionInfo(
            id=subscription_id,
            status="active",
            customer_id="cus_1",
            user_id=self.subscription_owner,
            current_period_end=datetime(2030, 1, 1, tzinfo=timezone.utc),
            cancel_at_period_end=False,
        )

    def cancel_subscription(self, *, subscription_id: str) -> SubscriptionInfo:
        return SubscriptionInfo(
            id=subscription_id,
            status="canceled",
            customer_id="cus_1",
            user_id=self.subscription_owner,
            current_period_end=None,
            cancel_at_period_end=False,
        )

    def verify_webhook(self, *, signature: str, payload: bytes) -> StripeWebhookEvent:
        if self.error is not None:
            raise self.error
        return StripeWebhookEvent(event_id="evt_1", event_type="invoice.paid", object_id="in_1")


def _current_user() -> User:
    return User(id="user-1", email="alice@example.com")


def test_create_checkout_returns_provider_url(monkeypatch):
    monkeypatch.setenv("APP_URL", "https://shop.example.com")
    stripe_port = FakeStripePort()
    app.dependency_overrides[get_stripe_port] = lambda: stripe_port
    client = TestClient(app)

    response = client.post(
        "/api/create-checkout",
        json={"priceInCents": 1000, "productName": "Sample Product"},
    )

    assert response.status_code == 200
    assert response.json() == {"url": CHECKOUT_URL}
    assert stripe_port.calls == [
        {
            "price_in_cents": 1000,
            "product_name": "Sample Product",
            "success_url": "https://shop.example.com/success",
            "cancel_url": "https://shop.example.com/cancel",
        }
    ]

    app.dependency_overrides.clear()


def test_create_checkout_rejects_missing_fields_without_calling_provider():
    stripe_port = FakeStripePort()
    app.dependency_overrides[get_stripe_port] = lambda: stripe_port
    client = TestClient(app)

    bodies = [
        {"priceInCents": 0, "productName": ""},
        {"priceInCents": -500, "productName": "Sample Product"},
        {"productName": "Sample Product"},
        {"priceInCents": 1000},
        {"priceInCents": 1000, "productName": ""},
        {},
    ]
    for body in bodies:
        response = client.post("/api/create-checkout", json=body)
        assert response.status_code == 400
        assert response.json() == {"error": "Missing required fields"}

    assert stripe_port.calls == []

    app.dependency_overrides.clear()


def test_create_checkout_provider_failure_returns_500_with_message():
    app.dependency_overrides[get_stripe_port] = lambda: FakeStripePort(
        error=PaymentProviderError("Your card was declined."),
    )
    client = TestClient(app)

    response = client.post(
        "/api/create-checkout",
        json={"priceInCents": 1000, "productName": "Sample Product"},
    )

    assert response.status_code == 500
    assert response.json() == {"error": "Your card was declined."}

    app.dependency_overrides.clear()


def test_create_checkout_unexpected_error_is_generic_500():
    app.dependency_overrides[get_stripe_port] = lambda: FakeStripePort(error=RuntimeError("secret detail"))
    client = TestClient(app, raise_server_exceptions=False)

    response = client.post(
        "/api/create-checkout",
        json={"priceInCents": 1000, "productName": "Sample Product"},
    )

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}

    app.dependency_overrides.clear()


def test_create_checkout_without_stripe_key_fails_at_client_construction(monkeypatch):
    monkeypatch.setenv("STRIPE_SECRET_KEY", "")
    _get_stripe_client.cache_clear()
    client = TestClient(app)

    response = client.post(
        "/api/create-checkout",
        json={"priceInCents": 1000, "productName": "Sample Product"},
    )

    assert response.status_code == 500
    assert "error" in response.json()


def test_create_subscription_requires_session():
    app.dependency_overrides[get_stripe_port] = lambda: FakeStripePort()
    app.dependency_overrides[get_current_user] = _current_user
    client = TestClient(app)

    response = client.post("/api/create-subscription", json={"priceId": "price_123"})

    assert response.status_code == 200
    assert response.json() == {"url": CHECKOUT_URL}

    app.dependency_overrides.clear()


def test_get_subscription_of_other_user_is_not_found():
    app.dependency_overrides[get_stripe_port] = lambda: FakeStripePort(subscription_owner="user-2")
    app.dependency_overrides[get_current_user] = _current_user
    client = TestClient(app)

    response = client.get("/api/subscriptions/sub_1")

    assert response.status_code == 404
    assert response.json() == {"error": "Subscription not found."}

    app.dependency_overrides.clear()


def test_cancel_subscription_returns_canceled_status():
    app.dependency_overrides[get_stripe_port] = lambda: FakeStripePort()
    app.dependency_overrides[get_current_user] = _current_user
    client = TestClient(app)

    response = client.post("/api/subscriptions/sub_1/cancel")

    assert response.status_code == 200
    assert response.json()["status"] == "canceled"

    app.dependency_overrides.clear()


def test_webhook_acknowledges_verified_event():
    app.dependency_overrides[get_webhook_stripe_port] = lambda: FakeStripePort()
    client = TestClient(app)

    response = client.post(
        "/api/webhooks/stripe",
        content=b'{"id": "evt_1"}',
        headers={"Stripe-Signature": "t=1,v1=abc"},
    )

    assert response.status_code == 200
    assert response.json() == {"received": True, "event_type": "invoice.paid", "handled": True}

    app.dependency_overrides.clear()


def test_webhook_rejects_invalid_signature_with_fixed_message():
    app.dependency_overrides[get_webhook_stripe_port] = lambda: FakeStripePort(
        error=WebhookVerificationError("Invalid webhook signature"),
    )
    client = TestClient(app)

    response = client.post(
        "/api/webhooks/stripe",
        content=b"{}",
        headers={"Stripe-Signature": "bad"},
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid webhook signature"}

    app.dependency_overrides.clear()


def test_webhook_requires_signature_header():
    app.dependency_overrides[get_webhook_stripe_port] = lambda: FakeStripePort()
    client = TestClient(app)

    response = client.post("/api/webhooks/stripe", content=b"{}")

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid webhook signature"}

    app.dependency_overrides.clear()


def _stripe_client() -> StripeClient:
    return StripeClient(secret_key="sk_test_123", webhook_secret="whsec_123", api_version="2023-10-16")


def test_create_checkout_validates_before_building_stripe_client(monkeypatch):
    monkeypatch.setenv("STRIPE_SECRET_KEY", "")
    _get_stripe_client.cache_clear()
    client = TestClient(app)

    response = client.post("/api/create-checkout", json={"priceInCents": 0, "productName": ""})

    assert response.status_code == 400
    assert response.json() == {"error": "Missing required fields"}

    _get_stripe_client.cache_clear()


def test_create_checkout_hides_stripe_account_errors(monkeypatch):
    def fake_create(**kwargs):
        raise stripe.AuthenticationError("Invalid API Key provided: sk_live_****1234")

    monkeypatch.setattr(stripe.checkout.Session, "create", fake_create)
    app.dependency_overrides[get_stripe_port] = _stripe_client
    client = TestClient(app)

    response = client.post(
        "/api/create-checkout",
        json={"priceInCents": 1000, "productName": "Sample Product"},
    )

    assert response.status_code == 500
    assert response.json() == {"error": GENERIC_CHECKOUT_ERROR}
    assert "sk_live" not in response.text

    app.dependency_overrides.clear()


def test_get_unknown_subscription_is_not_found(monkeypatch):
    def fake_retrieve(subscription_id):
        raise stripe.InvalidRequestError(
            f"No such subscription: '{subscription_id}'",
            param="id",
            code="resource_missing",
            http_status=404,
        )

    monkeypatch.setattr(stripe.Subscription, "retrieve", fake_retrieve)
    app.dependency_overrides[get_stripe_port] = _stripe_client
    app.dependency_overrides[get_current_user] = _current_user
    client = TestClient(app)

    get_response = client.get("/api/subscriptions/sub_missing")
    cancel_response = client.post("/api/subscriptions/sub_missing/cancel")

    assert get_response.status_code == 404
    assert get_response.json() == {"error": "Subscription not found."}
    assert cancel_response.status_code == 404
    assert cancel_response.json() == {"error": "Subscription not found."}

    app.dependency_overrides.clear()
