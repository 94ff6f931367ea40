"""Repository contract for auction state."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from auction_api.models import Auction

logger = logging.getLogger(__name__)


class StateStoreError(Exception):
    """The state store could not be reached or returned something unusable."""


@dataclass(frozen=True)
class StateEntry:
    auction: Auction
    # Version token from the store; None when the store does not track one.
    etag: Optional[str] = None


class AuctionRepository(ABC):
    """Get/list/put/delete of auctions keyed by id in a remote store.

    The store offers no transactions. ``put`` is an unconditional overwrite
    unless an ETag is passed, in which case the store rejects the write if
    the record changed since that ETag was read.

    Read paths raise ``StateStoreError`` on transport faults. ``put`` and
    ``delete`` report failure by returning False.
    """

    @abstractmethod
    async def get_entry(self, auction_id: str) -> Optional[StateEntry]:
        """Fetch an auction together with its version token."""

    @abstractmethod
    async def list_all(self) -> list[Auction]:
        """Fetch every stored auction, unfiltered."""

    @abstractmethod
    async def put(self, auction: Auction, etag: Optional[str] = None) -> bool:
        """Store the auction under its id."""

    @abstractmethod
    async def delete(self, auction_id: str) -> bool:
        """Remove the auction stored under the id."""

    async def get(self, auction_id: str) -> Optional[Auction]:
        entry = await self.get_entry(auction_id)
        return entry.auction if entry else None

    async def create(self, auction: Auction) -> bool:
        """Store a new auction.

        Returns False only when the id is already taken. A store that cannot
        be read or refuses the write raises ``StateStoreError``.
        """
        if await self.get(auction.id) is not None:
            logger.info(f"Auction {auction.id} already exists")
            return False

        if not await self.put(auction):
            raise StateStoreError(f"Failed to store new auction {auction.id}")
        return True
