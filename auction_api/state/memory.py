"""In-process auction repository for local development and tests."""

from __future__ import annotations

import logging
from typing import Any, Optional

from auction_api.models import Auction
from auction_api.state.base import AuctionRepository, StateEntry

logger = logging.getLogger(__name__)


class InMemoryAuctionRepository(AuctionRepository):
    """Keeps serialized auctions in a dict, with an integer version as ETag."""

    def __init__(self):
        self._records: dict[str, tuple[dict[str, Any], int]] = {}

    async def get_entry(self, auction_id: str) -> Optional[StateEntry]:
        record = self._records.get(auction_id)
        if record is None:
            return None
        data, version = record
        return StateEntry(auction=Auction.model_validate(data), etag=str(version))

    async def list_all(self) -> list[Auction]:
        return [Auction.model_validate(data) for data, _ in self._records.values()]

    async def put(self, auction: Auction, etag: Optional[str] = None) -> bool:
        current = self._records.get(auction.id)
        version = current[1] if current else 0

        if etag is not None and etag != str(version):
            logger.warning(f"Auction {auction.id} was modified concurrently, write rejected")
            return False

        self._records[auction.id] = (auction.to_state(), version + 1)
        return True

    async def delete(self, auction_id: str) -> bool:
        self._records.pop(auction_id, None)
        return True
