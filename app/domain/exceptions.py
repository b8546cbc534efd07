from __future__ import annotations


class DomainError(Exception):
    """Base for domain errors."""


class AuthValidationError(DomainError):
    """Sign-up or sign-in fields are missing or malformed."""


class AuthProviderError(DomainError):
    """The authentication provider rejected or failed the request."""


class AuthSessionMissingError(AuthProviderError):
    """No session cookie could be resolved to a user."""


class PaymentProviderError(DomainError):
    """The payment provider rejected or failed the request."""


class SubscriptionNotFoundError(DomainError):
    """Subscription does not exist or belongs to another user."""


class WebhookVerificationError(DomainError):
    """Webhook payload failed signature verification."""
