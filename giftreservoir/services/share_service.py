"""Resolve share tokens to wishlists for unauthenticated viewers"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
import logging

from giftreservoir.models import Wishlist
from giftreservoir.core.exceptions import NotFoundException
from giftreservoir.schemas.wishlist import WishlistDetail
from .wishlist_service import with_items_and_claims, to_detail

logger = logging.getLogger(__name__)

class ShareService:
    """Share link resolver"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def resolve_by_token(self, token: str) -> WishlistDetail:
        """
        Look up a wishlist by exact share token

        Claims and claimer profiles are included as-is; anyone holding the
        link sees who claimed what.

        Raises:
            NotFoundException: If no wishlist has this token
        """
        result = await self.db.execute(
            select(Wishlist)
            .options(with_items_and_claims())
            .where(Wishlist.share_token == token)
        )
        wishlist = result.scalar_one_or_none()

        if not wishlist:
            raise NotFoundException("Wishlist not found")

        return to_detail(wishlist)
