from __future__ import annotations

import logging

from app.application.dto.auth import AuthActionOutput, SignUpInput
from app.application.ports.auth_port import AuthPort
from app.domain.exceptions import AuthProviderError, AuthValidationError

from .auth_common import DASHBOARD_PATH, require_credentials, require_password_length


logger = logging.getLogger(__name__)


class SignUpUseCase:
    def __init__(self, *, auth_port: AuthPort):
        self._auth_port = auth_port

    def execute(self, command: SignUpInput) -> AuthActionOutput:
        try:
            require_credentials(command.email, command.password)
            require_password_length(command.password)
        except AuthValidationError as exc:
            return AuthActionOutput.failure(str(exc))

        try:
            self._auth_port.sign_up(email=command.email, password=command.password)
        except AuthProviderError as exc:
            logger.info("sign_up: provider_rejected reason=%s", exc)
            return AuthActionOutput.failure(str(exc))

        return AuthActionOutput.redirect(DASHBOARD_PATH)
