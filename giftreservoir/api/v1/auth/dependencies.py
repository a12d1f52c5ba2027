"""
Authentication dependencies
"""

from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from giftreservoir.core.database import get_db
from giftreservoir.core.exceptions import UnauthorizedException
from giftreservoir.core.security import SecurityUtils
from giftreservoir.models import User
from giftreservoir.services.user_service import UserService, profile_from_claims

security = HTTPBearer(auto_error=False)

async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> User:
    """
    Get current authenticated user (required)

    The token's profile claims are upserted so the user row exists before
    anything references it. Raises 401 if the token is missing or invalid.
    """
    if credentials is None:
        raise UnauthorizedException("Not authenticated")

    payload = SecurityUtils.decode_token(credentials.credentials)

    user = await UserService(db).upsert_user(payload["sub"], profile_from_claims(payload))

    # Used by the rate limiter key function
    request.state.user_id = user.id

    return user
