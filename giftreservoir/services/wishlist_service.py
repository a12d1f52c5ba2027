"""
Wishlist service layer
Handles wishlist CRUD with owner scoping and derived counts
"""

from typing import List, Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload
from sqlalchemy import select, update, delete, func
import logging

from giftreservoir.models import Wishlist, Item, Claim
from giftreservoir.core.exceptions import NotFoundException, TokenCollisionException
from giftreservoir.core.security import SecurityUtils
from giftreservoir.schemas.wishlist import (
    WishlistCreate,
    WishlistUpdate,
    WishlistResponse,
    WishlistDetail,
    ItemWithClaim,
)

logger = logging.getLogger(__name__)

def item_count_subquery():
    """Correlated count of a wishlist's items"""
    return (
        select(func.count(Item.id))
        .where(Item.wishlist_id == Wishlist.id)
        .correlate(Wishlist)
        .scalar_subquery()
    )

def claimed_count_subquery():
    """Correlated count of a wishlist's claimed items"""
    return (
        select(func.count(Claim.id))
        .join(Item, Claim.item_id == Item.id)
        .where(Item.wishlist_id == Wishlist.id)
        .correlate(Wishlist)
        .scalar_subquery()
    )

def with_items_and_claims():
    """Loader options for a wishlist's items, their claims and claimers"""
    return selectinload(Wishlist.items).selectinload(Item.claim).selectinload(Claim.claimer)

def to_response(wishlist: Wishlist, item_count: int, claimed_count: int) -> WishlistResponse:
    return WishlistResponse(
        id=wishlist.id,
        owner_user_id=wishlist.owner_user_id,
        name=wishlist.name,
        description=wishlist.description,
        share_token=wishlist.share_token,
        created_at=wishlist.created_at,
        updated_at=wishlist.updated_at,
        item_count=item_count or 0,
        claimed_count=claimed_count or 0,
    )

def to_detail(wishlist: Wishlist) -> WishlistDetail:
    """Serialize a wishlist loaded with ``with_items_and_claims()``"""
    items = [ItemWithClaim.model_validate(item) for item in wishlist.items]
    summary = to_response(
        wishlist,
        item_count=len(items),
        claimed_count=sum(1 for item in items if item.claim is not None),
    )
    return WishlistDetail(**summary.model_dump(), items=items)

class WishlistService:
    """Wishlist service"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _counts(self, wishlist_id: int) -> Tuple[int, int]:
        result = await self.db.execute(
            select(item_count_subquery(), claimed_count_subquery())
            .where(Wishlist.id == wishlist_id)
        )
        row = result.one_or_none()
        if row is None:
            return 0, 0
        return row[0] or 0, row[1] or 0

    async def list_wishlists(self, user_id: str) -> List[WishlistResponse]:
        """
        Get all wishlists owned by a user, newest first

        Counts are computed in the same query, never cached.
        """
        result = await self.db.execute(
            select(
                Wishlist,
                item_count_subquery().label("item_count"),
                claimed_count_subquery().label("claimed_count"),
            )
            .where(Wishlist.owner_user_id == user_id)
            .order_by(Wishlist.created_at.desc(), Wishlist.id.desc())
        )

        return [
            to_response(wishlist, item_count, claimed_count)
            for wishlist, item_count, claimed_count in result.all()
        ]

    async def get_wishlist(self, user_id: str, wishlist_id: int) -> WishlistDetail:
        """
        Get a wishlist owned by ``user_id`` with items and claims

        Raises:
            NotFoundException: If the wishlist is missing or owned by someone else
        """
        result = await self.db.execute(
            select(Wishlist)
            .options(with_items_and_claims())
            .where(
                Wishlist.id == wishlist_id,
                Wishlist.owner_user_id == user_id
            )
        )
        wishlist = result.scalar_one_or_none()

        if not wishlist:
            raise NotFoundException("Wishlist not found")

        return to_detail(wishlist)

    async def _insert_wishlist(self, user_id: str, data: WishlistCreate) -> Optional[Wishlist]:
        wishlist = Wishlist(
            owner_user_id=user_id,
            name=data.name,
            description=data.description,
            share_token=SecurityUtils.generate_share_token(),
        )
        self.db.add(wishlist)

        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            return None

        await self.db.refresh(wishlist)
        return wishlist

    async def create_wishlist(self, user_id: str, data: WishlistCreate) -> WishlistResponse:
        """
        Create a wishlist with a freshly generated share token

        A unique violation on the token is retried once with a new token.

        Raises:
            TokenCollisionException: If the retry collides as well
        """
        wishlist = await self._insert_wishlist(user_id, data)

        if wishlist is None:
            logger.warning(f"Share token collision creating wishlist for user {user_id}, retrying")
            wishlist = await self._insert_wishlist(user_id, data)

        if wishlist is None:
            logger.error(f"Share token collided twice for user {user_id}")
            raise TokenCollisionException()

        logger.info(f"Wishlist {wishlist.id} created by user {user_id}")
        return to_response(wishlist, 0, 0)

    async def update_wishlist(
        self,
        user_id: str,
        wishlist_id: int,
        data: WishlistUpdate
    ) -> WishlistResponse:
        """
        Update the mutable fields of an owned wishlist

        Raises:
            NotFoundException: If the wishlist is missing or owned by someone else
        """
        changes = data.changes()

        result = await self.db.execute(
            update(Wishlist)
            .where(
                Wishlist.id == wishlist_id,
                Wishlist.owner_user_id == user_id
            )
            .values(**changes, updated_at=func.now())
            .execution_options(synchronize_session=False)
        )

        if result.rowcount == 0:
            raise NotFoundException("Wishlist not found")

        await self.db.commit()

        wishlist = await self.db.get(Wishlist, wishlist_id, populate_existing=True)
        if wishlist is None:
            # Deleted between the update and the re-read
            raise NotFoundException("Wishlist not found")

        item_count, claimed_count = await self._counts(wishlist_id)

        return to_response(wishlist, item_count, claimed_count)

    async def delete_wishlist(self, user_id: str, wishlist_id: int) -> None:
        """
        Delete an owned wishlist; items and claims go with it

        Raises:
            NotFoundException: If the wishlist is missing or owned by someone else
        """
        result = await self.db.execute(
            delete(Wishlist)
            .where(
                Wishlist.id == wishlist_id,
                Wishlist.owner_user_id == user_id
            )
            .execution_options(synchronize_session=False)
        )

        if result.rowcount == 0:
            raise NotFoundException("Wishlist not found")

        await self.db.commit()
        logger.info(f"Wishlist {wishlist_id} deleted by user {user_id}")
