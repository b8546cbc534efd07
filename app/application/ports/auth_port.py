from __future__ import annotations

from typing import Protocol

from app.domain.entities.user import User


class AuthPort(Protocol):
    def sign_up(self, *, email: str, password: str) -> None:
        ...

    def sign_in_with_password(self, *, email: str, password: str) -> None:
        ...

    def sign_out(self) -> None:
        ...

    def get_user(self) -> User | None:
        ...
