from __future__ import annotations

import logging

from app.application.dto.auth import AuthActionOutput
from app.application.ports.auth_port import AuthPort
from app.domain.exceptions import AuthProviderError

from .auth_common import HOME_PATH


logger = logging.getLogger(__name__)


class SignOutUseCase:
    """Ends the session. Provider failures are logged; the caller always goes home."""

    def __init__(self, *, auth_port: AuthPort):
        self._auth_port = auth_port

    def execute(self) -> AuthActionOutput:
        try:
            self._auth_port.sign_out()
        except AuthProviderError as exc:
            logger.warning("sign_out: provider_error reason=%s", exc)
        return AuthActionOutput.redirect(HOME_PATH)
