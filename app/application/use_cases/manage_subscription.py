from __future__ import annotations

import logging

from app.application.dto.billing import SubscriptionInfo, SubscriptionQueryInput
from app.application.ports.stripe_port import StripePort
from app.domain.exceptions import SubscriptionNotFoundError


logger = logging.getLogger(__name__)


def _ensure_owner(subscription: SubscriptionInfo, user_id: str) -> None:
    if subscription.user_id != user_id:
        raise SubscriptionNotFoundError("Subscription not found.")


class GetSubscriptionUseCase:
    def __init__(self, *, stripe_port: StripePort):
        self._stripe_port = stripe_port

    def execute(self, command: SubscriptionQueryInput) -> SubscriptionInfo:
        subscription = self._stripe_port.retrieve_subscription(
            subscription_id=command.subscription_id,
        )
        _ensure_owner(subscription, command.user_id)
        return subscription


class CancelSubscriptionUseCase:
    def __init__(self, *, stripe_port: StripePort):
        self._stripe_port = stripe_port

    def execute(self, command: SubscriptionQueryInput) -> SubscriptionInfo:
        subscription = self._stripe_port.retrieve_subscription(
            subscription_id=command.subscription_id,
        )
        _ensure_owner(subscription, command.user_id)

        canceled = self._stripe_port.cancel_subscription(subscription_id=subscription.id)
        logger.info(
            "cancel_subscription: canceled subscription_id=%s user_id=%s status=%s",
            canceled.id,
            command.user_id,
            canceled.status,
        )
        return canceled
