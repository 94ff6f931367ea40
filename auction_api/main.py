"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from auction_api import __version__
from auction_api.config import settings
from auction_api.routes.auctions import router as auctions_router
from auction_api.state import StateStoreError

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info("Starting Auction API...")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"State backend: {settings.state_backend} (store={settings.state_store_name})")

    yield

    logger.info("Shutting down Auction API...")


# Create FastAPI app
app = FastAPI(
    title="Auction API",
    description="Auction listings with ascending bids and buy-it-now purchases",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routes
app.include_router(auctions_router)


@app.exception_handler(StateStoreError)
async def state_store_error_handler(request: Request, exc: StateStoreError):
    logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=500, content={"detail": "State store unavailable"})


@app.get("/")
async def root():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": "Auction API",
        "version": __version__,
    }


@app.get("/health")
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "environment": settings.environment,
        "state_backend": settings.state_backend,
        "state_store": settings.state_store_name,
        "optimistic_concurrency": settings.optimistic_concurrency,
    }
