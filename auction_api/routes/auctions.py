"""Auction routes: listings, bids and buy-it-now purchases."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.responses import JSONResponse

from auction_api.dependencies import get_admin, get_offer_engine, get_queries
from auction_api.models import Auction, Offer
from auction_api.services import AuctionAdmin, AuctionQueries, OfferEngine, OfferResult

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auctions", tags=["auctions"])

OFFER_STATUS = {
    OfferResult.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    OfferResult.TOO_LOW: status.HTTP_409_CONFLICT,
    OfferResult.TOO_HIGH: status.HTTP_409_CONFLICT,
    OfferResult.ALREADY_PURCHASED: status.HTTP_409_CONFLICT,
    OfferResult.EXPIRED: status.HTTP_406_NOT_ACCEPTABLE,
    OfferResult.SUCCESS: status.HTTP_201_CREATED,
    OfferResult.SERVER_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _offer_response(result: OfferResult) -> JSONResponse:
    return JSONResponse(status_code=OFFER_STATUS[result], content={"result": result.value})


@router.get("", response_model=list[Auction])
async def list_auctions(queries: AuctionQueries = Depends(get_queries)):
    """Get every auction."""
    return await queries.list_auctions()


@router.get("/{auction_id}", response_model=Auction)
async def get_auction(auction_id: str, queries: AuctionQueries = Depends(get_queries)):
    """Get a single auction by id."""
    auction = await queries.get_auction(auction_id)
    if auction is None:
        raise HTTPException(status_code=404, detail="Auction not found")
    return auction


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_auction(auction: Auction, admin: AuctionAdmin = Depends(get_admin)):
    """Create an auction. The id is chosen by the client and must be unused."""
    if not await admin.create_auction(auction):
        raise HTTPException(status_code=409, detail="Auction already exists")
    return {"id": auction.id}


@router.put("", status_code=status.HTTP_204_NO_CONTENT)
async def update_auction(auction: Auction, admin: AuctionAdmin = Depends(get_admin)):
    """Update the listing details of an existing auction."""
    if not await admin.update_auction(auction):
        raise HTTPException(status_code=404, detail="Auction not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{auction_id}")
async def delete_auction(auction_id: str, admin: AuctionAdmin = Depends(get_admin)):
    """Delete an auction."""
    if not await admin.delete_auction(auction_id):
        raise HTTPException(status_code=404, detail="Auction not found")
    return {"id": auction_id, "deleted": True}


@router.get("/{auction_id}/bids", response_model=list[Offer])
async def list_bids(auction_id: str, queries: AuctionQueries = Depends(get_queries)):
    """Get the bid history of an auction, oldest first."""
    offers = await queries.list_offers(auction_id)
    if offers is None:
        raise HTTPException(status_code=404, detail="Auction not found")
    return offers


@router.post("/{auction_id}/bids")
async def place_bid(auction_id: str, offer: Offer, engine: OfferEngine = Depends(get_offer_engine)):
    """Place a bid on an auction."""
    result = await engine.submit_bid(auction_id, offer)
    logger.debug(f"Bid of {offer.price} on {auction_id}: {result.value}")
    return _offer_response(result)


@router.post("/{auction_id}/purchase")
async def purchase(auction_id: str, offer: Offer, engine: OfferEngine = Depends(get_offer_engine)):
    """Buy an auction outright at its buy-it-now price."""
    result = await engine.submit_purchase(auction_id, offer)
    logger.debug(f"Purchase of {auction_id} at {offer.price}: {result.value}")
    return _offer_response(result)
