"""Auction state repositories."""

from auction_api.state.base import AuctionRepository, StateEntry, StateStoreError
from auction_api.state.dapr import DaprAuctionRepository
from auction_api.state.memory import InMemoryAuctionRepository

__all__ = [
    "AuctionRepository",
    "StateEntry",
    "StateStoreError",
    "DaprAuctionRepository",
    "InMemoryAuctionRepository",
]
