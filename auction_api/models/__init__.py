"""Auction data models."""

from auction_api.models.offer import Offer
from auction_api.models.auction import Auction

__all__ = [
    "Offer",
    "Auction",
]
