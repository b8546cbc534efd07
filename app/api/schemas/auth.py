from __future__ import annotations

from pydantic import BaseModel


class CredentialsRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class AuthFormPageResponse(BaseModel):
    page: str
    action: str
    fields: list[str]
    alternate: str
