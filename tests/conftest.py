"""Shared fixtures for the auction tests."""

import pytest

from auction_api.models import Auction, Offer
from auction_api.state import InMemoryAuctionRepository, StateStoreError

NOW = 1_700_000_000_000
HOUR = 60 * 60 * 1000


class FakeClock:
    """Settable epoch-millisecond clock."""

    def __init__(self, now: int = NOW):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int):
        self.now += ms


class UnreachableRepository(InMemoryAuctionRepository):
    """Every read fails as if the sidecar were down."""

    async def get_entry(self, auction_id):
        raise StateStoreError("connection refused")

    async def list_all(self):
        raise StateStoreError("connection refused")


class FailingWriteRepository(InMemoryAuctionRepository):
    """Reads work; writes and deletes fail once ``accept_writes`` is switched off."""

    def __init__(self):
        super().__init__()
        self.accept_writes = True

    async def put(self, auction, etag=None):
        if not self.accept_writes:
            return False
        return await super().put(auction, etag=etag)

    async def delete(self, auction_id):
        if not self.accept_writes:
            return False
        return await super().delete(auction_id)


def build_auction(**overrides) -> Auction:
    fields = {
        "id": "auction-1",
        "seller_id": "seller-1",
        "title": "Signed 1986 baseball",
        "description": "Game ball, signed by the whole team",
        "start_bid": 100,
        "bin_price": 10000,
        "image_data": "aGVsbG8gd29ybGQ=",
        "creation_timestamp": NOW - 1000,
        "expiration_timestamp": NOW + HOUR,
    }
    fields.update(overrides)
    return Auction(**fields)


def offer(price: float, user_id: str = "buyer-1", at: int = NOW) -> Offer:
    return Offer(user_id=user_id, price=price, creation_timestamp=at)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def repo():
    return InMemoryAuctionRepository()


@pytest.fixture
def make_auction():
    return build_auction


@pytest.fixture
def make_offer():
    return offer
