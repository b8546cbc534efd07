from __future__ import annotations

from fastapi import APIRouter, Depends, Header, HTTPException, Request

from app.api.deps import (
    get_cancel_subscription_use_case,
    get_create_checkout_session_use_case,
    get_create_subscription_session_use_case,
    get_current_user,
    get_get_subscription_use_case,
    get_process_stripe_webhook_use_case,
)
from app.api.schemas.billing import (
    CheckoutUrlResponse,
    CreateCheckoutRequest,
    CreateSubscriptionRequest,
    StripeWebhookResponse,
    SubscriptionResponse,
)
from app.application.dto.billing import (
    CreateCheckoutSessionInput,
    CreateSubscriptionSessionInput,
    StripeWebhookInput,
    SubscriptionInfo,
    SubscriptionQueryInput,
)
from app.application.use_cases.create_checkout_session import CreateCheckoutSessionUseCase
from app.application.use_cases.create_subscription_session import CreateSubscriptionSessionUseCase
from app.application.use_cases.manage_subscription import (
    CancelSubscriptionUseCase,
    GetSubscriptionUseCase,
)
from app.application.use_cases.process_stripe_webhook import ProcessStripeWebhookUseCase
from app.domain.entities.user import User
from app.domain.exceptions import (
    PaymentProviderError,
    SubscriptionNotFoundError,
    WebhookVerificationError,
)
from app.shared.config import get_settings


router = APIRouter()

MISSING_FIELDS_MESSAGE = "Missing required fields"
INVALID_SIGNATURE_MESSAGE = "Invalid webhook signature"


def _subscription_response(subscription: SubscriptionInfo) -> SubscriptionResponse:
    return SubscriptionResponse(
        id=subscription.id,
        status=subscription.status,
        customer_id=subscription.customer_id,
        current_period_end=subscription.current_period_end,
        cancel_at_period_end=subscription.cancel_at_period_end,
    )


def validated_checkout_request(req: CreateCheckoutRequest) -> CreateCheckoutRequest:
    if not req.price_in_cents or req.price_in_cents <= 0 or not req.product_name:
        raise HTTPException(status_code=400, detail=MISSING_FIELDS_MESSAGE)
    return req


# Resolved before the use case, so invalid bodies never build a Stripe client.
@router.post("/api/create-checkout", response_model=CheckoutUrlResponse)
def create_checkout(
    req: CreateCheckoutRequest = Depends(validated_checkout_request),
    use_case: CreateCheckoutSessionUseCase = Depends(get_create_checkout_session_use_case),
):
    settings = get_settings()
    result = use_case.execute(
        CreateCheckoutSessionInput(
            price_in_cents=req.price_in_cents,
            product_name=req.product_name,
            success_url=settings.absolute_url("/success"),
            cancel_url=settings.absolute_url("/cancel"),
        )
    )
    if result.error is not None:
        raise HTTPException(status_code=500, detail=result.error)

    return CheckoutUrlResponse(url=result.url)


@router.post("/api/create-subscription", response_model=CheckoutUrlResponse)
def create_subscription(
    req: CreateSubscriptionRequest,
    current_user: User = Depends(get_current_user),
    use_case: CreateSubscriptionSessionUseCase = Depends(get_create_subscription_session_use_case),
):
    if not req.price_id:
        raise HTTPException(status_code=400, detail=MISSING_FIELDS_MESSAGE)

    settings = get_settings()
    result = use_case.execute(
        CreateSubscriptionSessionInput(
            price_id=req.price_id,
            user_id=current_user.id,
            customer_email=current_user.email or None,
            success_url=settings.absolute_url("/success"),
            cancel_url=settings.absolute_url("/cancel"),
        )
    )
    if result.error is not None:
        raise HTTPException(status_code=500, detail=result.error)

    return CheckoutUrlResponse(url=result.url)


@router.get("/api/subscriptions/{subscription_id}", response_model=SubscriptionResponse)
def get_subscription(
    subscription_id: str,
    current_user: User = Depends(get_current_user),
    use_case: GetSubscriptionUseCase = Depends(get_get_subscription_use_case),
):
    try:
        subscription = use_case.execute(
            SubscriptionQueryInput(subscription_id=subscription_id, user_id=current_user.id)
        )
    except SubscriptionNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except PaymentProviderError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    return _subscription_response(subscription)


@router.post("/api/subscriptions/{subscription_id}/cancel", response_model=SubscriptionResponse)
def cancel_subscription(
    subscription_id: str,
    current_user: User = Depends(get_current_user),
    use_case: CancelSubscriptionUseCase = Depends(get_cancel_subscription_use_case),
):
    try:
        subscription = use_case.execute(
            SubscriptionQueryInput(subscription_id=subscription_id, user_id=current_user.id)
        )
    except SubscriptionNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except PaymentProviderError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    return _subscription_response(subscription)


@router.post("/api/webhooks/stripe", response_model=StripeWebhookResponse)
async def stripe_webhook(
    request: Request,
    stripe_signature: str | None = Header(default=None, alias="Stripe-Signature"),
    use_case: ProcessStripeWebhookUseCase = Depends(get_process_stripe_webhook_use_case),
):
    if not stripe_signature:
        raise HTTPException(status_code=400, detail=INVALID_SIGNATURE_MESSAGE)

    payload = await request.body()
    try:
        output = use_case.execute(
            StripeWebhookInput(
                signature=stripe_signature,
                payload=payload,
            )
        )
    except WebhookVerificationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return StripeWebhookResponse(event_type=output.event_type, handled=output.handled)
