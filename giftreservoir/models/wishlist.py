"""
Wishlist, item and claim models

Deletes cascade at the database level: wishlist -> items -> claim.
"""

from sqlalchemy import Column, String, Text, Integer, DateTime, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .base import BaseModel, TimestampedModel

class Wishlist(BaseModel, TimestampedModel):
    """Named collection of items owned by one user"""

    __tablename__ = "wishlists"

    id = Column(Integer, primary_key=True, autoincrement=True)
    owner_user_id = Column(
        String(255),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False
    )
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    # Generated once at creation, never updated
    share_token = Column(String(64), nullable=False)

    # Relationships
    owner = relationship("User", back_populates="wishlists")
    items = relationship(
        "Item",
        back_populates="wishlist",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Item.id"
    )

    __table_args__ = (
        UniqueConstraint("share_token", name="uq_wishlists_share_token"),
        Index("idx_wishlists_owner", "owner_user_id"),
    )

class Item(BaseModel, TimestampedModel):
    """A single desired product entry within a wishlist"""

    __tablename__ = "items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    wishlist_id = Column(
        Integer,
        ForeignKey("wishlists.id", ondelete="CASCADE"),
        nullable=False
    )
    name = Column(String(255), nullable=False)
    url = Column(Text, nullable=True)
    description = Column(Text, nullable=True)
    price = Column(String(100), nullable=True)
    image_url = Column(Text, nullable=True)

    # Relationships
    wishlist = relationship("Wishlist", back_populates="items")
    claim = relationship(
        "Claim",
        back_populates="item",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True
    )

    __table_args__ = (
        Index("idx_items_wishlist", "wishlist_id"),
    )

class Claim(BaseModel):
    """Reservation of an item by a non-owner; at most one per item"""

    __tablename__ = "claims"

    id = Column(Integer, primary_key=True, autoincrement=True)
    item_id = Column(
        Integer,
        ForeignKey("items.id", ondelete="CASCADE"),
        nullable=False
    )
    claimer_user_id = Column(
        String(255),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False
    )
    claimed_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    # Relationships
    item = relationship("Item", back_populates="claim")
    claimer = relationship("User", back_populates="claims")

    # The unique item_id is what serialises concurrent claims
    __table_args__ = (
        UniqueConstraint("item_id", name="uq_claims_item"),
        Index("idx_claims_claimer", "claimer_user_id"),
    )
