"""User service for identity records"""

from typing import Any, Dict, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select
import logging

from giftreservoir.models.user import User
from giftreservoir.utils.validators import validate_email_address

logger = logging.getLogger(__name__)

PROFILE_CLAIMS = ("email", "first_name", "last_name", "profile_image_url")

def profile_from_claims(claims: Dict[str, Any]) -> Dict[str, Optional[str]]:
    """Extract the user profile carried in verified token claims"""
    profile = {key: claims.get(key) for key in PROFILE_CLAIMS if key in claims}

    email = profile.get("email")
    if email:
        try:
            profile["email"] = validate_email_address(email)
        except ValueError:
            logger.warning(f"Ignoring invalid email claim for user {claims.get('sub')}")
            profile.pop("email")

    return profile

class UserService:
    """Service class for user operations"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_user(self, user_id: str) -> Optional[User]:
        """Get user by ID"""
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def upsert_user(self, user_id: str, profile: Dict[str, Optional[str]]) -> User:
        """
        Insert the user, or refresh their profile fields if they exist

        Only fields present in ``profile`` are written.
        """
        user = await self.get_user(user_id)

        if user is None:
            user = User(id=user_id, **profile)
            self.db.add(user)
            try:
                await self.db.commit()
            except IntegrityError:
                # Concurrent first sign-in inserted the same id
                await self.db.rollback()
                user = await self.get_user(user_id)
                if user is None:
                    raise
            else:
                await self.db.refresh(user)
                logger.info(f"Created user {user_id}")
                return user

        changed = {
            key: value for key, value in profile.items()
            if getattr(user, key) != value
        }
        if changed:
            for key, value in changed.items():
                setattr(user, key, value)
            await self.db.commit()
            await self.db.refresh(user)

        return user
