"""Auction business logic."""

from auction_api.services.auctions import AuctionAdmin
from auction_api.services.offers import OfferEngine, OfferResult
from auction_api.services.queries import AuctionQueries

__all__ = [
    "AuctionAdmin",
    "AuctionQueries",
    "OfferEngine",
    "OfferResult",
]
