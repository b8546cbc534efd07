from __future__ import annotations

import logging

from app.application.dto.billing import CheckoutSessionResult, CreateSubscriptionSessionInput
from app.application.ports.stripe_port import StripePort
from app.domain.exceptions import PaymentProviderError


logger = logging.getLogger(__name__)


class CreateSubscriptionSessionUseCase:
    def __init__(self, *, stripe_port: StripePort):
        self._stripe_port = stripe_port

    def execute(self, command: CreateSubscriptionSessionInput) -> CheckoutSessionResult:
        try:
            session = self._stripe_port.create_subscription_checkout_session(
                price_id=command.price_id,
                user_id=command.user_id,
                customer_email=command.customer_email,
                success_url=command.success_url,
                cancel_url=command.cancel_url,
            )
        except PaymentProviderError as exc:
            logger.error(
                "create_subscription_session: failed price_id=%s user_id=%s reason=%s",
                command.price_id,
                command.user_id,
                exc,
            )
            return CheckoutSessionResult.failure(str(exc))

        logger.info(
            "create_subscription_session: created session_id=%s user_id=%s",
            session.id,
            command.user_id,
        )
        return CheckoutSessionResult.success(session.url)
