"""Request/response schemas"""

from .user import UserPublic, UserResponse
from .wishlist import (
    WishlistCreate,
    WishlistUpdate,
    WishlistResponse,
    WishlistDetail,
    ItemCreate,
    ItemUpdate,
    ItemResponse,
    ItemWithClaim,
    ClaimResponse,
    ClaimWithClaimer,
)

__all__ = [
    "UserPublic",
    "UserResponse",
    "WishlistCreate",
    "WishlistUpdate",
    "WishlistResponse",
    "WishlistDetail",
    "ItemCreate",
    "ItemUpdate",
    "ItemResponse",
    "ItemWithClaim",
    "ClaimResponse",
    "ClaimWithClaimer",
]
