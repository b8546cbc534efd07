from __future__ import annotations

import logging

from app.application.dto.billing import StripeWebhookInput, StripeWebhookOutput
from app.application.ports.stripe_port import StripePort


logger = logging.getLogger(__name__)


HANDLED_EVENT_TYPES = frozenset(
    {
        "checkout.session.completed",
        "customer.subscription.created",
        "customer.subscription.updated",
        "customer.subscription.deleted",
        "invoice.paid",
        "invoice.payment_failed",
    }
)


class ProcessStripeWebhookUseCase:
    """Verifies a webhook delivery and acknowledges it.

    Nothing is persisted here; known event types are logged so a project
    built on this template has a single place to hook fulfillment in.
    """

    def __init__(self, *, stripe_port: StripePort):
        self._stripe_port = stripe_port

    def execute(self, command: StripeWebhookInput) -> StripeWebhookOutput:
        event = self._stripe_port.verify_webhook(signature=command.signature, payload=command.payload)

        if event.event_type not in HANDLED_EVENT_TYPES:
            logger.debug(
                "stripe_webhook: ignored event_id=%s type=%s",
                event.event_id,
                event.event_type,
            )
            return StripeWebhookOutput(event_type=event.event_type, handled=False)

        logger.info(
            "stripe_webhook: received event_id=%s type=%s object_id=%s",
            event.event_id,
            event.event_type,
            event.object_id,
        )
        return StripeWebhookOutput(event_type=event.event_type, handled=True)
