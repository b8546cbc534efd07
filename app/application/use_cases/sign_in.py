from __future__ import annotations

import logging

from app.application.dto.auth import AuthActionOutput, SignInInput
from app.application.ports.auth_port import AuthPort
from app.domain.exceptions import AuthProviderError, AuthValidationError

from .auth_common import DASHBOARD_PATH, require_credentials


logger = logging.getLogger(__name__)


class SignInUseCase:
    def __init__(self, *, auth_port: AuthPort):
        self._auth_port = auth_port

    def execute(self, command: SignInInput) -> AuthActionOutput:
        try:
            require_credentials(command.email, command.password)
        except AuthValidationError as exc:
            return AuthActionOutput.failure(str(exc))

        try:
            self._auth_port.sign_in_with_password(email=command.email, password=command.password)
        except AuthProviderError as exc:
            logger.info("sign_in: provider_rejected reason=%s", exc)
            return AuthActionOutput.failure(str(exc))

        return AuthActionOutput.redirect(DASHBOARD_PATH)
