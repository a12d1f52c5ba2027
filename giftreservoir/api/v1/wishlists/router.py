"""Wishlist endpoints"""

from typing import List
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from giftreservoir.core.database import get_db
from giftreservoir.api.v1.auth.dependencies import get_current_user
from giftreservoir.api.v1.params import EntityId
from giftreservoir.models import User
from giftreservoir.services.wishlist_service import WishlistService
from giftreservoir.services.item_service import ItemService
from giftreservoir.services.share_service import ShareService
from giftreservoir.schemas.wishlist import (
    WishlistCreate,
    WishlistUpdate,
    WishlistResponse,
    WishlistDetail,
    ItemCreate,
    ItemResponse,
)

router = APIRouter()

@router.get("", response_model=List[WishlistResponse])
async def list_wishlists(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """List the current user's wishlists with item and claimed counts"""
    service = WishlistService(db)
    return await service.list_wishlists(current_user.id)

@router.get("/shared/{token}", response_model=WishlistDetail)
async def get_shared_wishlist(
    token: str,
    db: AsyncSession = Depends(get_db)
):
    """Get a wishlist by its share token (no authentication)"""
    service = ShareService(db)
    return await service.resolve_by_token(token)

@router.get("/{wishlist_id}", response_model=WishlistDetail)
async def get_wishlist(
    wishlist_id: EntityId,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Get one of the current user's wishlists with items and claims"""
    service = WishlistService(db)
    return await service.get_wishlist(current_user.id, wishlist_id)

@router.post("", response_model=WishlistResponse, status_code=status.HTTP_201_CREATED)
async def create_wishlist(
    wishlist_data: WishlistCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Create a wishlist"""
    service = WishlistService(db)
    return await service.create_wishlist(current_user.id, wishlist_data)

@router.patch("/{wishlist_id}", response_model=WishlistResponse)
async def update_wishlist(
    wishlist_id: EntityId,
    wishlist_data: WishlistUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Update a wishlist's name or description"""
    service = WishlistService(db)
    return await service.update_wishlist(current_user.id, wishlist_id, wishlist_data)

@router.delete(
    "/{wishlist_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response
)
async def delete_wishlist(
    wishlist_id: EntityId,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Delete a wishlist with all of its items and claims"""
    service = WishlistService(db)
    await service.delete_wishlist(current_user.id, wishlist_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.post(
    "/{wishlist_id}/items",
    response_model=ItemResponse,
    status_code=status.HTTP_201_CREATED
)
async def create_item(
    wishlist_id: EntityId,
    item_data: ItemCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Add an item to one of the current user's wishlists"""
    service = ItemService(db)
    return await service.create_item(current_user.id, wishlist_id, item_data)
