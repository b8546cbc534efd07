from __future__ import annotations

import logging

from app.application.dto.billing import CheckoutSessionResult, CreateCheckoutSessionInput
from app.application.ports.stripe_port import StripePort
from app.domain.exceptions import PaymentProviderError


logger = logging.getLogger(__name__)


class CreateCheckoutSessionUseCase:
    """Mints a one-time payment checkout session.

    Inputs are expected to be validated by the caller. Provider failures are
    returned as ``CheckoutSessionResult.error`` and never raised.
    """

    def __init__(self, *, stripe_port: StripePort):
        self._stripe_port = stripe_port

    def execute(self, command: CreateCheckoutSessionInput) -> CheckoutSessionResult:
        try:
            session = self._stripe_port.create_payment_checkout_session(
                price_in_cents=command.price_in_cents,
                product_name=command.product_name,
                success_url=command.success_url,
                cancel_url=command.cancel_url,
            )
        except PaymentProviderError as exc:
            logger.error(
                "create_checkout_session: failed product=%s price_in_cents=%s reason=%s",
                command.product_name,
                command.price_in_cents,
                exc,
            )
            return CheckoutSessionResult.failure(str(exc))

        logger.info("create_checkout_session: created session_id=%s", session.id)
        return CheckoutSessionResult.success(session.url)
