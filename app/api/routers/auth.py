from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, RedirectResponse, Response

from app.api.deps import (
    get_cookie_storage,
    get_sign_in_use_case,
    get_sign_out_use_case,
    get_sign_up_use_case,
)
from app.api.schemas.auth import AuthFormPageResponse, CredentialsRequest
from app.application.dto.auth import AuthActionOutput, SignInInput, SignUpInput
from app.application.use_cases.sign_in import SignInUseCase
from app.application.use_cases.sign_out import SignOutUseCase
from app.application.use_cases.sign_up import SignUpUseCase
from app.infrastructure.session.cookie_storage import CookieSessionStorage
from app.shared.config import get_settings


router = APIRouter()


def _action_response(output: AuthActionOutput, storage: CookieSessionStorage) -> Response:
    if output.error is not None:
        response: Response = JSONResponse({"error": output.error}, status_code=400)
    else:
        response = RedirectResponse(url=output.redirect_to, status_code=303)
    storage.commit(response, secure=get_settings().auth_cookie_secure)
    return response


@router.post("/auth/signup")
def sign_up(
    req: CredentialsRequest,
    storage: CookieSessionStorage = Depends(get_cookie_storage),
    use_case: SignUpUseCase = Depends(get_sign_up_use_case),
):
    output = use_case.execute(SignUpInput(email=req.email or "", password=req.password or ""))
    return _action_response(output, storage)


@router.post("/auth/login")
def sign_in(
    req: CredentialsRequest,
    storage: CookieSessionStorage = Depends(get_cookie_storage),
    use_case: SignInUseCase = Depends(get_sign_in_use_case),
):
    output = use_case.execute(SignInInput(email=req.email or "", password=req.password or ""))
    return _action_response(output, storage)


@router.api_route("/auth/logout", methods=["GET", "POST"])
def sign_out(
    storage: CookieSessionStorage = Depends(get_cookie_storage),
    use_case: SignOutUseCase = Depends(get_sign_out_use_case),
):
    output = use_case.execute()
    storage.clear()
    return _action_response(output, storage)


@router.get("/auth/login", response_model=AuthFormPageResponse)
def login_page():
    return AuthFormPageResponse(
        page="login",
        action="/auth/login",
        fields=["email", "password"],
        alternate="/auth/signup",
    )


@router.get("/auth/signup", response_model=AuthFormPageResponse)
def signup_page():
    return AuthFormPageResponse(
        page="signup",
        action="/auth/signup",
        fields=["email", "password"],
        alternate="/auth/login",
    )
