"""Create, update and delete auctions."""

import logging

from auction_api.config import settings
from auction_api.models import Auction
from auction_api.state import AuctionRepository, StateStoreError

logger = logging.getLogger(__name__)


class AuctionAdmin:
    """Listing lifecycle outside of bidding.

    False means the id was taken (create) or unknown (update, delete). A
    store fault or refused write raises ``StateStoreError``.
    """

    def __init__(self, repository: AuctionRepository):
        self.repository = repository

    async def create_auction(self, auction: Auction) -> bool:
        """Store a new listing. Returns False if the id is already taken."""
        # A new listing never carries bids or a purchase
        fresh = auction.model_copy(update={"offers": (), "purchase": None})
        created = await self.repository.create(fresh)
        if created:
            logger.info(f"Created auction {auction.id} for seller {auction.seller_id}")
        return created

    async def update_auction(self, auction: Auction) -> bool:
        """
        Replace the listing details of an existing auction.

        Bid history and purchase are kept from the stored record; those only
        change through the offer engine. Returns False if the id is unknown.
        """
        entry = await self.repository.get_entry(auction.id)
        if entry is None:
            return False

        updated = auction.model_copy(
            update={"offers": entry.auction.offers, "purchase": entry.auction.purchase}
        )
        etag = entry.etag if settings.optimistic_concurrency else None
        if not await self.repository.put(updated, etag=etag):
            raise StateStoreError(f"Failed to save auction {auction.id}")
        return True

    async def delete_auction(self, auction_id: str) -> bool:
        """Delete an auction. Returns False if it did not exist."""
        if await self.repository.get(auction_id) is None:
            return False

        if not await self.repository.delete(auction_id):
            raise StateStoreError(f"Failed to delete auction {auction_id}")

        if await self.repository.get(auction_id) is not None:
            raise StateStoreError(f"Auction {auction_id} still present after delete")

        logger.info(f"Deleted auction {auction_id}")
        return True
