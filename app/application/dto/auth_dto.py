"""
Authentication DTOs for the application layer.
"""

from pydantic import EmailStr, Field

from app.application.dto.base_dto import RequestDTO


class LoginRequestDTO(RequestDTO):
    """DTO for email / password login."""

    email: EmailStr
    password: str = Field(min_length=1)


class ForgotPasswordRequestDTO(RequestDTO):
    """DTO for requesting a password reset email."""

    email: EmailStr
