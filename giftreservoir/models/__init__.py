"""Models package initialization"""

from .base import Base
from .user import User
from .wishlist import Wishlist, Item, Claim

# Export all models
__all__ = [
    "Base",
    "User",
    "Wishlist",
    "Item",
    "Claim",
]
