"""Item and claim endpoints"""

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from giftreservoir.core.config import settings
from giftreservoir.core.database import get_db
from giftreservoir.api.v1.auth.dependencies import get_current_user
from giftreservoir.api.v1.params import EntityId
from giftreservoir.middleware.rate_limit import limiter
from giftreservoir.models import User
from giftreservoir.services.item_service import ItemService
from giftreservoir.services.claim_service import ClaimService
from giftreservoir.schemas.wishlist import ItemUpdate, ItemResponse, ClaimResponse

router = APIRouter()

@router.patch("/{item_id}", response_model=ItemResponse)
async def update_item(
    item_id: EntityId,
    item_data: ItemUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Update an item in one of the current user's wishlists"""
    service = ItemService(db)
    return await service.update_item(current_user.id, item_id, item_data)

@router.delete(
    "/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response
)
async def delete_item(
    item_id: EntityId,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Delete an item (and its claim)"""
    service = ItemService(db)
    await service.delete_item(current_user.id, item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.post(
    "/{item_id}/claim",
    response_model=ClaimResponse,
    status_code=status.HTTP_201_CREATED
)
@limiter.limit(settings.RATE_LIMIT_CLAIM)
async def claim_item(
    request: Request,
    item_id: EntityId,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Claim an item from someone else's wishlist"""
    service = ClaimService(db)
    return await service.claim(current_user.id, item_id)

@router.delete(
    "/{item_id}/claim",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response
)
@limiter.limit(settings.RATE_LIMIT_CLAIM)
async def unclaim_item(
    request: Request,
    item_id: EntityId,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Release a claim held by the current user"""
    service = ClaimService(db)
    await service.unclaim(current_user.id, item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
