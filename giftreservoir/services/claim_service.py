"""
Claim service layer
Handles reserving and releasing wishlist items
"""

from typing import Dict, Optional, Set
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select, delete
import enum
import logging

from giftreservoir.models import Claim, Item, Wishlist
from giftreservoir.core.exceptions import (
    NotFoundException,
    AlreadyClaimedException,
    SelfClaimForbiddenException
)
from giftreservoir.core.monitoring import claim_attempts, unclaim_attempts

logger = logging.getLogger(__name__)

class ClaimState(str, enum.Enum):
    UNCLAIMED = "unclaimed"
    CLAIMED = "claimed"

class ClaimStateMachine:
    """
    Valid claim state transitions for a single item

    There is no claimed -> claimed edge: changing the claimer means
    unclaiming first.
    """

    def __init__(self):
        self.transitions: Dict[ClaimState, Set[ClaimState]] = {
            ClaimState.UNCLAIMED: {ClaimState.CLAIMED},
            ClaimState.CLAIMED: {ClaimState.UNCLAIMED},
        }

    def can_transition(self, current_state: ClaimState, new_state: ClaimState) -> bool:
        """Check if transition is valid"""
        return new_state in self.transitions.get(current_state, set())

    @staticmethod
    def state_of(claim: Optional[Claim]) -> ClaimState:
        return ClaimState.CLAIMED if claim else ClaimState.UNCLAIMED

class ClaimService:
    """Claim engine: one active claim per item, never by the item's owner"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.state_machine = ClaimStateMachine()

    async def get_claim(self, item_id: int) -> Optional[Claim]:
        """Get the active claim for an item, if any"""
        result = await self.db.execute(
            select(Claim).where(Claim.item_id == item_id)
        )
        return result.scalar_one_or_none()

    async def _item_owner(self, item_id: int) -> Optional[str]:
        result = await self.db.execute(
            select(Wishlist.owner_user_id)
            .join(Item, Item.wishlist_id == Wishlist.id)
            .where(Item.id == item_id)
        )
        return result.scalar_one_or_none()

    async def claim(self, user_id: str, item_id: int) -> Claim:
        """
        Claim an item for ``user_id``

        Args:
            user_id: Requesting user
            item_id: Item to claim

        Returns:
            The new claim

        Raises:
            NotFoundException: If the item does not exist
            SelfClaimForbiddenException: If the user owns the item's wishlist
            AlreadyClaimedException: If the item already has a claim
        """
        owner_id = await self._item_owner(item_id)
        if owner_id is None:
            claim_attempts.labels(outcome="not_found").inc()
            raise NotFoundException("Item not found")

        if owner_id == user_id:
            claim_attempts.labels(outcome="self_claim").inc()
            raise SelfClaimForbiddenException()

        existing = await self.get_claim(item_id)
        if not self.state_machine.can_transition(
            self.state_machine.state_of(existing), ClaimState.CLAIMED
        ):
            claim_attempts.labels(outcome="already_claimed").inc()
            raise AlreadyClaimedException()

        claim = Claim(item_id=item_id, claimer_user_id=user_id)
        self.db.add(claim)

        try:
            await self.db.commit()
        except IntegrityError:
            # Lost the race on uq_claims_item, or the item vanished meanwhile
            await self.db.rollback()
            if await self._item_owner(item_id) is None:
                claim_attempts.labels(outcome="not_found").inc()
                raise NotFoundException("Item not found")

            logger.info(f"Concurrent claim on item {item_id} rejected for user {user_id}")
            claim_attempts.labels(outcome="already_claimed").inc()
            raise AlreadyClaimedException()

        await self.db.refresh(claim)
        claim_attempts.labels(outcome="claimed").inc()
        logger.info(f"Item {item_id} claimed by user {user_id}")

        return claim

    async def unclaim(self, user_id: str, item_id: int) -> None:
        """
        Release the claim ``user_id`` holds on an item

        A missing claim and a claim held by someone else are reported the
        same way.

        Raises:
            NotFoundException: If the user holds no claim on the item
        """
        result = await self.db.execute(
            delete(Claim).where(
                Claim.item_id == item_id,
                Claim.claimer_user_id == user_id
            )
        )

        if result.rowcount == 0:
            unclaim_attempts.labels(outcome="not_found").inc()
            raise NotFoundException("Claim not found")

        await self.db.commit()
        unclaim_attempts.labels(outcome="unclaimed").inc()
        logger.info(f"Item {item_id} unclaimed by user {user_id}")
