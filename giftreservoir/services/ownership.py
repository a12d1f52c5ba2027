"""
Ownership guard

A wishlist, and every item in it, may only be read by id or mutated by the
wishlist's owner. Lookups are scoped by both id and owner in a single query,
so a missing row and someone else's row look the same to the caller.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select
import logging

from giftreservoir.models import Wishlist, Item
from giftreservoir.core.exceptions import NotFoundException

logger = logging.getLogger(__name__)

def owned_wishlist_ids(user_id: str) -> Select:
    """Subquery selecting the ids of wishlists owned by ``user_id``"""
    return select(Wishlist.id).where(Wishlist.owner_user_id == user_id)

def owned_item_clause(user_id: str):
    """WHERE clause restricting items to wishlists owned by ``user_id``"""
    return Item.wishlist_id.in_(owned_wishlist_ids(user_id))

class OwnershipGuard:
    """Authorizes wishlist and item access for a requesting user"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def authorize_wishlist_mutation(self, user_id: str, wishlist_id: int) -> Wishlist:
        """
        Return the wishlist if ``user_id`` owns it

        Raises:
            NotFoundException: If the wishlist does not exist or is not owned by the user
        """
        result = await self.db.execute(
            select(Wishlist).where(
                Wishlist.id == wishlist_id,
                Wishlist.owner_user_id == user_id
            )
        )
        wishlist = result.scalar_one_or_none()

        if not wishlist:
            logger.debug(f"Wishlist {wishlist_id} not accessible to user {user_id}")
            raise NotFoundException("Wishlist not found")

        return wishlist

    async def authorize_item_mutation(self, user_id: str, item_id: int) -> Item:
        """
        Return the item if ``user_id`` owns its wishlist

        Raises:
            NotFoundException: If the item does not exist or belongs to another user's wishlist
        """
        result = await self.db.execute(
            select(Item).where(
                Item.id == item_id,
                owned_item_clause(user_id)
            )
        )
        item = result.scalar_one_or_none()

        if not item:
            logger.debug(f"Item {item_id} not accessible to user {user_id}")
            raise NotFoundException("Item not found")

        return item
