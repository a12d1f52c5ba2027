"""
User model
Identity records upserted from the identity provider on sign-in
"""

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from .base import BaseModel, TimestampedModel

class User(BaseModel, TimestampedModel):
    """Authenticated user, keyed by the identity provider's subject"""

    __tablename__ = "users"

    id = Column(String(255), primary_key=True)
    email = Column(String(255), unique=True, index=True, nullable=True)
    first_name = Column(String(255), nullable=True)
    last_name = Column(String(255), nullable=True)
    profile_image_url = Column(String(2048), nullable=True)

    # Relationships
    wishlists = relationship(
        "Wishlist",
        back_populates="owner",
        cascade="all, delete-orphan",
        passive_deletes=True
    )
    claims = relationship(
        "Claim",
        back_populates="claimer",
        cascade="all, delete-orphan",
        passive_deletes=True
    )
