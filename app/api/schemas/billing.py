from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CreateCheckoutRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    price_in_cents: int | None = Field(default=None, alias="priceInCents")
    product_name: str | None = Field(default=None, alias="productName")


class CreateSubscriptionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    price_id: str | None = Field(default=None, alias="priceId")


class CheckoutUrlResponse(BaseModel):
    url: str


class SubscriptionResponse(BaseModel):
    id: str
    status: str
    customer_id: str | None
    current_period_end: datetime | None
    cancel_at_period_end: bool


class StripeWebhookResponse(BaseModel):
    received: bool = True
    event_type: str
    handled: bool
