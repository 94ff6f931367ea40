"""Read-only views over stored auctions."""

import logging
from typing import Optional

from auction_api.models import Auction, Offer
from auction_api.state import AuctionRepository, StateStoreError

logger = logging.getLogger(__name__)


class AuctionQueries:
    """Every read goes to the repository; nothing is cached."""

    def __init__(self, repository: AuctionRepository):
        self.repository = repository

    async def list_auctions(self) -> list[Auction]:
        """All stored auctions, or an empty list if the store is unavailable."""
        try:
            return await self.repository.list_all()
        except StateStoreError as e:
            logger.error(f"Listing auctions failed, returning none: {e}")
            return []

    async def get_auction(self, auction_id: str) -> Optional[Auction]:
        return await self.repository.get(auction_id)

    async def list_offers(self, auction_id: str) -> Optional[list[Offer]]:
        """
        Bid history of an auction.

        Returns None when the auction does not exist, and an empty list when
        it exists but nobody has bid yet.
        """
        auction = await self.repository.get(auction_id)
        if auction is None:
            return None
        return list(auction.offers)
