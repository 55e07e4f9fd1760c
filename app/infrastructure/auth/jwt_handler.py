"""
JWT token handler for Supabase authentication.
Validates access tokens and extracts user information.
"""

from typing import Dict, Any
from datetime import datetime, timedelta, timezone
from jose import JWTError, jwt as jose_jwt

from app.domain.models.base import UnauthorizedError


class JWTHandler:
    """Handles JWT token validation and user extraction."""

    def __init__(self, secret: str, algorithm: str = "HS256"):
        self.jwt_secret = secret
        self.jwt_algorithm = algorithm

    def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify and decode a Supabase access token.

        Args:
            token: JWT token string, without the scheme

        Returns:
            Dict containing token payload

        Raises:
            UnauthorizedError: If token is invalid or expired
        """
        try:
            payload = jose_jwt.decode(
                token,
                self.jwt_secret,
                algorithms=[self.jwt_algorithm],
                options={"verify_exp": True, "verify_aud": False}
            )
        except JWTError:
            raise UnauthorizedError("Invalid or expired token")

        if not payload.get("sub"):
            raise UnauthorizedError("Invalid or expired token")

        return payload

    def generate_test_token(
        self,
        user_id: str,
        email: str = "test@example.com",
        expires_minutes: int = 60
    ) -> str:
        """
        Generate a token shaped like a Supabase access token.
        Only meant for development and tests.
        """
        now = datetime.now(timezone.utc)
        expire = now + timedelta(minutes=expires_minutes)

        payload = {
            "sub": user_id,
            "email": email,
            "role": "authenticated",
            "iat": int(now.timestamp()),
            "exp": int(expire.timestamp()),
            "aud": "authenticated",
            "iss": "supabase"
        }

        return jose_jwt.encode(payload, self.jwt_secret, algorithm=self.jwt_algorithm)
