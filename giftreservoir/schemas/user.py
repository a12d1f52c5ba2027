"""
User schemas
"""

from typing import Optional
from datetime import datetime

from .base import BaseSchema

class UserPublic(BaseSchema):
    """Profile fields visible to anyone who can see a claim"""
    id: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None

class UserResponse(UserPublic):
    """Current user"""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
