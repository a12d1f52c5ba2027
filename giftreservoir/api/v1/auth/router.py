"""Authentication endpoints"""

from fastapi import APIRouter, Depends

from giftreservoir.models import User
from giftreservoir.schemas.user import UserResponse
from .dependencies import get_current_user

router = APIRouter()

@router.get("/user", response_model=UserResponse)
async def get_authenticated_user(
    current_user: User = Depends(get_current_user)
):
    """Get the signed-in user's profile"""
    return current_user
