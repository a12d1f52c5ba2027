"""GiftReservoir: shared wishlists with gift claiming"""

__version__ = "1.0.0"
