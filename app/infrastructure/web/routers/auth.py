"""
Authentication router.
Login, logout and password reset through Supabase Auth.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.application.dto.auth_dto import LoginRequestDTO, ForgotPasswordRequestDTO
from app.application.use_cases.auth_use_cases import AuthUseCases
from app.infrastructure.auth.dependencies import CurrentUser, get_current_user
from app.infrastructure.web.dependencies import get_auth_use_cases
from app.infrastructure.web.responses import success_response


router = APIRouter()


@router.post("/login")
async def login(
    request: LoginRequestDTO,
    use_cases: Annotated[AuthUseCases, Depends(get_auth_use_cases)]
):
    """
    Authenticate with email and password.

    - **email**: Account email
    - **password**: Account password
    """
    result = await use_cases.login(request.email, request.password)
    return success_response(result)


@router.post("/logout")
async def logout(
    user: Annotated[CurrentUser, Depends(get_current_user)],
    use_cases: Annotated[AuthUseCases, Depends(get_auth_use_cases)]
):
    """Revoke the current session."""
    result = await use_cases.logout(user.access_token, user.id)
    return success_response(result)


@router.post("/forgot-password", status_code=status.HTTP_200_OK)
async def forgot_password(
    request: ForgotPasswordRequestDTO,
    use_cases: Annotated[AuthUseCases, Depends(get_auth_use_cases)]
):
    """
    Send a password reset email.
    The response does not reveal whether the account exists.
    """
    result = await use_cases.forgot_password(request.email)
    return success_response(result)
