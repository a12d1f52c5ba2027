"""Service layer"""

from .ownership import OwnershipGuard
from .claim_service import ClaimService, ClaimState, ClaimStateMachine
from .wishlist_service import WishlistService
from .item_service import ItemService
from .share_service import ShareService
from .user_service import UserService

__all__ = [
    "OwnershipGuard",
    "ClaimService",
    "ClaimState",
    "ClaimStateMachine",
    "WishlistService",
    "ItemService",
    "ShareService",
    "UserService",
]
