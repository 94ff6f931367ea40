"""Tests for the auction query and admin services."""

import pytest

from auction_api.services import AuctionAdmin, AuctionQueries
from auction_api.state import StateStoreError

from conftest import FailingWriteRepository, UnreachableRepository


class TestQueries:
    @pytest.mark.asyncio
    async def test_list_auctions(self, repo, make_auction):
        await repo.put(make_auction(id="a-1"))
        await repo.put(make_auction(id="a-2"))

        auctions = await AuctionQueries(repo).list_auctions()

        assert sorted(a.id for a in auctions) == ["a-1", "a-2"]

    @pytest.mark.asyncio
    async def test_list_auctions_empty_when_store_down(self):
        assert await AuctionQueries(UnreachableRepository()).list_auctions() == []

    @pytest.mark.asyncio
    async def test_get_auction(self, repo, make_auction):
        await repo.put(make_auction())
        queries = AuctionQueries(repo)

        assert await queries.get_auction("auction-1") == make_auction()
        assert await queries.get_auction("missing") is None

    @pytest.mark.asyncio
    async def test_get_auction_propagates_store_errors(self):
        with pytest.raises(StateStoreError):
            await AuctionQueries(UnreachableRepository()).get_auction("auction-1")

    @pytest.mark.asyncio
    async def test_list_offers_distinguishes_missing_from_empty(self, repo, make_auction, make_offer):
        await repo.put(make_auction(id="empty"))
        await repo.put(make_auction(id="busy").with_offer(make_offer(120)).with_offer(make_offer(130)))
        queries = AuctionQueries(repo)

        assert await queries.list_offers("missing") is None
        assert await queries.list_offers("empty") == []
        assert [o.price for o in await queries.list_offers("busy")] == [120, 130]


class TestAdmin:
    @pytest.mark.asyncio
    async def test_create_then_get_round_trip(self, repo, make_auction):
        auction = make_auction()

        assert await AuctionAdmin(repo).create_auction(auction) is True
        assert await repo.get("auction-1") == auction

    @pytest.mark.asyncio
    async def test_create_rejects_id_collision(self, repo, make_auction):
        admin = AuctionAdmin(repo)
        await admin.create_auction(make_auction(title="first"))

        assert await admin.create_auction(make_auction(title="second")) is False
        assert (await repo.get("auction-1")).title == "first"

    @pytest.mark.asyncio
    async def test_create_drops_client_supplied_bids(self, repo, make_auction, make_offer):
        auction = make_auction().with_offer(make_offer(500)).with_purchase(make_offer(10000))

        await AuctionAdmin(repo).create_auction(auction)

        stored = await repo.get("auction-1")
        assert stored.offers == ()
        assert stored.purchase is None

    @pytest.mark.asyncio
    async def test_create_raises_when_store_down(self, make_auction):
        with pytest.raises(StateStoreError):
            await AuctionAdmin(UnreachableRepository()).create_auction(make_auction())

    @pytest.mark.asyncio
    async def test_create_raises_when_write_refused(self, make_auction):
        repo = FailingWriteRepository()
        repo.accept_writes = False

        with pytest.raises(StateStoreError):
            await AuctionAdmin(repo).create_auction(make_auction())
        assert await repo.get("auction-1") is None

    @pytest.mark.asyncio
    async def test_update_replaces_details_and_keeps_bids(self, repo, make_auction, make_offer):
        await repo.put(make_auction().with_offer(make_offer(150)))

        updated = await AuctionAdmin(repo).update_auction(make_auction(title="Renamed"))

        assert updated is True
        stored = await repo.get("auction-1")
        assert stored.title == "Renamed"
        assert [o.price for o in stored.offers] == [150]

    @pytest.mark.asyncio
    async def test_update_unknown_auction(self, repo, make_auction):
        assert await AuctionAdmin(repo).update_auction(make_auction()) is False
        assert await repo.get("auction-1") is None

    @pytest.mark.asyncio
    async def test_delete(self, repo, make_auction):
        await repo.put(make_auction())
        admin = AuctionAdmin(repo)

        assert await admin.delete_auction("auction-1") is True
        assert await repo.get("auction-1") is None
        assert await admin.delete_auction("auction-1") is False

    @pytest.mark.asyncio
    async def test_update_raises_when_write_refused(self, make_auction):
        repo = FailingWriteRepository()
        await repo.put(make_auction())
        repo.accept_writes = False

        with pytest.raises(StateStoreError):
            await AuctionAdmin(repo).update_auction(make_auction(title="Renamed"))
        assert (await repo.get("auction-1")).title == make_auction().title

    @pytest.mark.asyncio
    async def test_delete_raises_when_delete_refused(self, make_auction):
        repo = FailingWriteRepository()
        await repo.put(make_auction())
        repo.accept_writes = False

        with pytest.raises(StateStoreError):
            await AuctionAdmin(repo).delete_auction("auction-1")
        assert await repo.get("auction-1") is not None
