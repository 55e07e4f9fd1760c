"""
Authentication service interface.
Credentials and sessions are owned by an external identity provider;
this port lists the operations the application needs from it.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional


class AuthProviderError(Exception):
    """The identity provider rejected or failed an operation."""

    def __init__(self, message: str, code: Optional[str] = None, status: Optional[int] = None):
        self.message = message
        self.code = code
        self.status = status
        super().__init__(message)

    @property
    def is_duplicate_email(self) -> bool:
        """Whether the provider refused a new user because the email is registered."""
        if self.code == "email_exists":
            return True
        text = self.message.lower()
        return "already" in text and ("registered" in text or "exists" in text)


@dataclass
class AuthSession:
    """Tokens issued by a successful sign-in."""

    user_id: str
    email: str
    access_token: str
    refresh_token: str
    expires_at: Optional[int] = None


class AuthService(ABC):
    """
    Identity provider interface.
    Every method raises AuthProviderError on failure.
    """

    @abstractmethod
    async def sign_in(self, email: str, password: str) -> AuthSession:
        """
        Exchange credentials for a session.
        """
        pass

    @abstractmethod
    async def sign_out(self, access_token: str) -> None:
        """
        Revoke the session bound to an access token.
        """
        pass

    @abstractmethod
    async def send_password_reset(self, email: str) -> None:
        """
        Ask the provider to email a password reset link.
        """
        pass

    @abstractmethod
    async def create_user(self, email: str, password: str, metadata: Dict[str, Any]) -> str:
        """
        Create a confirmed user and return its ID.
        """
        pass

    @abstractmethod
    async def delete_user(self, user_id: str) -> None:
        pass

    @abstractmethod
    async def send_recovery_link(self, email: str) -> None:
        """
        Generate a recovery link so a new user can choose a password.
        """
        pass
