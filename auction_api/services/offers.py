"""Bid and buy-it-now validation for auctions.

Every offer goes through the same sequence: fetch the auction, check that it
can still take offers at all, check the price, then write the updated record
back. Existence, expiry and purchase state are checked before any price so
that a closed auction rejects every offer with the same reason.

The fetch-validate-write sequence is not atomic against the store. With
``optimistic_concurrency`` enabled the write carries the ETag that was read
and a concurrent writer makes it fail; without it the last write wins.
"""

from __future__ import annotations

import enum
import logging
import time
from typing import Callable, Optional

from auction_api.config import settings
from auction_api.models import Auction, Offer
from auction_api.state import AuctionRepository, StateEntry, StateStoreError

logger = logging.getLogger(__name__)


class OfferResult(enum.Enum):
    """Outcome of submitting a bid or a purchase."""

    NOT_FOUND = "not_found"
    EXPIRED = "expired"
    ALREADY_PURCHASED = "already_purchased"
    TOO_LOW = "too_low"
    TOO_HIGH = "too_high"
    SUCCESS = "success"
    SERVER_ERROR = "server_error"


def now_ms() -> int:
    return int(time.time() * 1000)


class OfferEngine:
    """Validates offers against the current auction state and applies them."""

    def __init__(
        self,
        repository: AuctionRepository,
        clock: Callable[[], int] = now_ms,
        optimistic_concurrency: Optional[bool] = None,
    ):
        self.repository = repository
        self.clock = clock
        self.optimistic_concurrency = (
            settings.optimistic_concurrency
            if optimistic_concurrency is None
            else optimistic_concurrency
        )

    async def submit_bid(self, auction_id: str, offer: Offer) -> OfferResult:
        """Place an ascending bid below the buy-it-now price."""
        entry = await self._fetch(auction_id)
        if isinstance(entry, OfferResult):
            return entry

        auction = entry.auction
        rejection = self._check_eligible(auction)
        if rejection is not None:
            return rejection

        if offer.price < auction.start_bid:
            return OfferResult.TOO_LOW

        # At or above BIN has to go through the purchase path
        if offer.price >= auction.bin_price:
            return OfferResult.TOO_HIGH

        highest = auction.highest_offer
        if highest is not None and offer.price <= highest.price:
            return OfferResult.TOO_LOW

        result = await self._write(auction.with_offer(offer), entry.etag)
        if result is OfferResult.SUCCESS:
            logger.info(f"Bid of {offer.price} by {offer.user_id} accepted on auction {auction_id}")
        return result

    async def submit_purchase(self, auction_id: str, offer: Offer) -> OfferResult:
        """Close the auction at exactly its buy-it-now price."""
        entry = await self._fetch(auction_id)
        if isinstance(entry, OfferResult):
            return entry

        auction = entry.auction
        rejection = self._check_eligible(auction)
        if rejection is not None:
            return rejection

        if offer.price < auction.bin_price:
            return OfferResult.TOO_LOW
        if offer.price > auction.bin_price:
            return OfferResult.TOO_HIGH

        result = await self._write(auction.with_purchase(offer), entry.etag)
        if result is OfferResult.SUCCESS:
            logger.info(f"Auction {auction_id} purchased by {offer.user_id} for {offer.price}")
        return result

    def _check_eligible(self, auction: Auction) -> Optional[OfferResult]:
        """Return the rejection reason if the auction takes no more offers."""
        if auction.is_expired(self.clock()):
            return OfferResult.EXPIRED
        if auction.is_purchased:
            return OfferResult.ALREADY_PURCHASED
        return None

    async def _fetch(self, auction_id: str) -> StateEntry | OfferResult:
        try:
            entry = await self.repository.get_entry(auction_id)
        except StateStoreError as e:
            logger.error(f"Could not load auction {auction_id}: {e}")
            return OfferResult.SERVER_ERROR

        if entry is None:
            return OfferResult.NOT_FOUND
        return entry

    async def _write(self, auction: Auction, etag: Optional[str]) -> OfferResult:
        if not self.optimistic_concurrency:
            etag = None

        if await self.repository.put(auction, etag=etag):
            return OfferResult.SUCCESS

        logger.error(f"Failed to save offer on auction {auction.id}")
        return OfferResult.SERVER_ERROR
