from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SignUpInput:
    email: str
    password: str


@dataclass(frozen=True)
class SignInInput:
    email: str
    password: str


@dataclass(frozen=True)
class AuthActionOutput:
    """Outcome of a form action: an error to render or a path to navigate to."""

    error: str | None = None
    redirect_to: str | None = None

    def __post_init__(self) -> None:
        if (self.error is None) == (self.redirect_to is None):
            raise ValueError("exactly one of error or redirect_to must be set.")

    @classmethod
    def failure(cls, error: str) -> AuthActionOutput:
        return cls(error=error)

    @classmethod
    def redirect(cls, path: str) -> AuthActionOutput:
        return cls(redirect_to=path)
