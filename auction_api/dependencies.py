"""State repository selection and FastAPI dependency providers."""

import logging

from fastapi import Depends

from auction_api.config import settings
from auction_api.services import AuctionAdmin, AuctionQueries, OfferEngine
from auction_api.state import AuctionRepository, DaprAuctionRepository, InMemoryAuctionRepository

logger = logging.getLogger(__name__)


def build_repository(backend: str | None = None) -> AuctionRepository:
    backend = (backend or settings.state_backend).lower()
    if backend == "memory":
        return InMemoryAuctionRepository()
    if backend == "dapr":
        return DaprAuctionRepository()
    raise ValueError(f"Unknown state backend: {backend}")


repository = build_repository()


def get_repository() -> AuctionRepository:
    """Dependency to get the auction repository."""
    return repository


def get_offer_engine(repo: AuctionRepository = Depends(get_repository)) -> OfferEngine:
    return OfferEngine(repo)


def get_queries(repo: AuctionRepository = Depends(get_repository)) -> AuctionQueries:
    return AuctionQueries(repo)


def get_admin(repo: AuctionRepository = Depends(get_repository)) -> AuctionAdmin:
    return AuctionAdmin(repo)
