from __future__ import annotations

import logging

from app.application.ports.auth_port import AuthPort
from app.domain.entities.user import User
from app.domain.exceptions import AuthProviderError, AuthSessionMissingError


logger = logging.getLogger(__name__)


class GetCurrentUserUseCase:
    def __init__(self, *, auth_port: AuthPort):
        self._auth_port = auth_port

    def execute(self) -> User | None:
        # Any failure resolves to "logged out".
        try:
            return self._auth_port.get_user()
        except AuthSessionMissingError:
            return None
        except AuthProviderError as exc:
            logger.error("get_current_user: provider_error reason=%s", exc)
            return None

    def is_authenticated(self) -> bool:
        return self.execute() is not None
