"""
Item service layer
Handles items inside owned wishlists
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import update, delete, func
import logging

from giftreservoir.models import Item
from giftreservoir.core.exceptions import NotFoundException
from giftreservoir.schemas.wishlist import ItemCreate, ItemUpdate
from .ownership import OwnershipGuard, owned_item_clause

logger = logging.getLogger(__name__)

class ItemService:
    """Wishlist item service"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.guard = OwnershipGuard(db)

    async def create_item(self, user_id: str, wishlist_id: int, data: ItemCreate) -> Item:
        """
        Add an item to a wishlist owned by ``user_id``

        Raises:
            NotFoundException: If the wishlist is missing or owned by someone else
        """
        wishlist = await self.guard.authorize_wishlist_mutation(user_id, wishlist_id)

        item = Item(wishlist_id=wishlist.id, **data.model_dump())
        self.db.add(item)
        await self.db.commit()
        await self.db.refresh(item)

        logger.info(f"Item {item.id} added to wishlist {wishlist.id}")
        return item

    async def update_item(self, user_id: str, item_id: int, data: ItemUpdate) -> Item:
        """
        Update the mutable fields of an item

        The ownership check lives in the UPDATE's WHERE clause so it is
        evaluated atomically with the write.

        Raises:
            NotFoundException: If the item is missing or in someone else's wishlist
        """
        changes = data.changes()

        result = await self.db.execute(
            update(Item)
            .where(
                Item.id == item_id,
                owned_item_clause(user_id)
            )
            .values(**changes, updated_at=func.now())
            .execution_options(synchronize_session=False)
        )

        if result.rowcount == 0:
            raise NotFoundException("Item not found")

        await self.db.commit()

        item = await self.guard.authorize_item_mutation(user_id, item_id)
        await self.db.refresh(item)
        return item

    async def delete_item(self, user_id: str, item_id: int) -> None:
        """
        Delete an item; its claim goes with it

        Raises:
            NotFoundException: If the item is missing or in someone else's wishlist
        """
        result = await self.db.execute(
            delete(Item)
            .where(
                Item.id == item_id,
                owned_item_clause(user_id)
            )
            .execution_options(synchronize_session=False)
        )

        if result.rowcount == 0:
            raise NotFoundException("Item not found")

        await self.db.commit()
        logger.info(f"Item {item_id} deleted by user {user_id}")
