"""
Wishlist, item and claim schemas for request/response validation

Update schemas carry the allow-list of mutable fields. A partial update only
merges the fields the client explicitly sent (``exclude_unset``).
"""

from pydantic import Field, field_validator
from typing import Any, Dict, List, Optional
from datetime import datetime

from giftreservoir.utils.validators import normalize_text, validate_optional_url
from .base import BaseSchema, InputSchema
from .user import UserPublic

NAME_MAX_LENGTH = 255
PRICE_MAX_LENGTH = 100

def _clean_name(value: Optional[str]) -> str:
    if value is None:
        raise ValueError("Name is required")
    value = normalize_text(value)
    if not value:
        raise ValueError("Name is required")
    if len(value) > NAME_MAX_LENGTH:
        raise ValueError(f"Name must be at most {NAME_MAX_LENGTH} characters")
    return value

def _clean_optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value or None

# Wishlists

class WishlistCreate(InputSchema):
    """Schema for creating a wishlist"""
    name: str
    description: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return _clean_name(v)

    @field_validator("description")
    @classmethod
    def validate_description(cls, v):
        return _clean_optional_text(v)

class WishlistUpdate(InputSchema):
    """Schema for updating a wishlist (partial)"""
    name: Optional[str] = None
    description: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return _clean_name(v)

    @field_validator("description")
    @classmethod
    def validate_description(cls, v):
        return _clean_optional_text(v)

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)

# Items

class ItemCreate(InputSchema):
    """Schema for adding an item to a wishlist"""
    name: str
    url: Optional[str] = None
    description: Optional[str] = None
    price: Optional[str] = Field(None, max_length=PRICE_MAX_LENGTH)
    image_url: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return _clean_name(v)

    @field_validator("url", "image_url")
    @classmethod
    def validate_urls(cls, v):
        return validate_optional_url(v)

    @field_validator("description", "price")
    @classmethod
    def validate_text(cls, v):
        return _clean_optional_text(v)

class ItemUpdate(InputSchema):
    """Schema for updating an item (partial); wishlist_id is not mutable"""
    name: Optional[str] = None
    url: Optional[str] = None
    description: Optional[str] = None
    price: Optional[str] = Field(None, max_length=PRICE_MAX_LENGTH)
    image_url: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return _clean_name(v)

    @field_validator("url", "image_url")
    @classmethod
    def validate_urls(cls, v):
        return validate_optional_url(v)

    @field_validator("description", "price")
    @classmethod
    def validate_text(cls, v):
        return _clean_optional_text(v)

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)

# Responses

class ClaimResponse(BaseSchema):
    """Claim as returned from the claim endpoint"""
    id: int
    item_id: int
    claimer_user_id: str
    claimed_at: datetime

class ClaimWithClaimer(ClaimResponse):
    """Claim with the claimer's public profile"""
    claimer: Optional[UserPublic] = None

class ItemResponse(BaseSchema):
    """Schema for item response"""
    id: int
    wishlist_id: int
    name: str
    url: Optional[str] = None
    description: Optional[str] = None
    price: Optional[str] = None
    image_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime

class ItemWithClaim(ItemResponse):
    """Item with its claim state"""
    claim: Optional[ClaimWithClaimer] = None

class WishlistResponse(BaseSchema):
    """Wishlist with derived counts"""
    id: int
    owner_user_id: str
    name: str
    description: Optional[str] = None
    share_token: str
    created_at: datetime
    updated_at: datetime
    item_count: int = 0
    claimed_count: int = 0

class WishlistDetail(WishlistResponse):
    """Wishlist with items, claims and claimers"""
    items: List[ItemWithClaim] = []
