"""
Security utilities for authentication
Handles bearer token verification and share token generation
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import JWTError, jwt
import secrets

from .config import settings
from .exceptions import UnauthorizedException

class SecurityUtils:
    """Security utility functions"""

    @staticmethod
    def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
        """
        Create JWT access token

        The identity provider normally issues these; this helper exists for
        local development and tests.
        """
        to_encode = data.copy()
        expire = datetime.now(timezone.utc) + (
            expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        )
        to_encode.update({"exp": expire, "type": "access"})
        return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

    @staticmethod
    def decode_token(token: str) -> Dict[str, Any]:
        """Decode and validate JWT token"""
        try:
            payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        except JWTError:
            raise UnauthorizedException("Invalid authentication credentials")

        if payload.get("type") != "access":
            raise UnauthorizedException("Invalid token type")

        if not payload.get("sub"):
            raise UnauthorizedException("Token has no subject")

        return payload

    @staticmethod
    def generate_share_token(nbytes: Optional[int] = None) -> str:
        """Generate an opaque, URL-safe share token (hex encoded)"""
        return secrets.token_hex(nbytes or settings.SHARE_TOKEN_BYTES)
