"""Auction repository backed by a Dapr sidecar state store.

The sidecar exposes the state store over plain HTTP:
- GET    /v1.0/state/<store>/<key>
- POST   /v1.0/state/<store>            (bulk save)
- DELETE /v1.0/state/<store>/<key>
- POST   /v1.0-alpha1/state/<store>/query
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from auction_api.config import settings
from auction_api.models import Auction
from auction_api.state.base import AuctionRepository, StateEntry, StateStoreError

logger = logging.getLogger(__name__)


class DaprAuctionRepository(AuctionRepository):
    """Stores auctions as JSON values keyed by auction id."""

    QUERY_PAGE_SIZE = 100

    def __init__(
        self,
        base_url: str | None = None,
        store_name: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        base_url = (base_url or settings.dapr_base_url).rstrip("/")
        store_name = store_name or settings.state_store_name
        self.state_url = f"{base_url}/v1.0/state/{store_name}"
        self.query_url = f"{base_url}/v1.0-alpha1/state/{store_name}/query"
        self.timeout = timeout if timeout is not None else settings.state_timeout_seconds
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self._transport, timeout=self.timeout)

    async def get_entry(self, auction_id: str) -> Optional[StateEntry]:
        url = f"{self.state_url}/{auction_id}"

        try:
            async with self._client() as client:
                response = await client.get(url)
        except httpx.HTTPError as e:
            logger.error(f"State store GET {auction_id} failed: {e!r}")
            raise StateStoreError(f"Failed to fetch auction {auction_id}") from e

        # Dapr answers 204 with an empty body for unknown keys
        if response.status_code == 204:
            return None

        if response.status_code != 200:
            logger.error(f"State store GET error: {response.status_code} - {response.text}")
            raise StateStoreError(f"State store returned {response.status_code} for {auction_id}")

        if not response.content:
            return None

        try:
            auction = Auction.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.error(f"Stored auction {auction_id} could not be decoded: {e}")
            raise StateStoreError(f"Stored auction {auction_id} is malformed") from e

        return StateEntry(auction=auction, etag=response.headers.get("ETag"))

    async def list_all(self) -> list[Auction]:
        auctions: list[Auction] = []
        token: Optional[str] = None

        async with self._client() as client:
            while True:
                page: dict[str, Any] = {"limit": self.QUERY_PAGE_SIZE}
                if token:
                    page["token"] = token

                try:
                    response = await client.post(self.query_url, json={"filter": {}, "page": page})
                except httpx.HTTPError as e:
                    logger.error(f"State store query failed: {e!r}")
                    raise StateStoreError("Failed to query auctions") from e

                if response.status_code != 200:
                    logger.error(f"State store query error: {response.status_code} - {response.text}")
                    raise StateStoreError(f"State store query returned {response.status_code}")

                try:
                    data = response.json() or {}
                except ValueError as e:
                    raise StateStoreError("State store query returned invalid JSON") from e

                results = data.get("results") or []
                auctions.extend(self._parse_results(results))

                token = data.get("token")
                if not token or not results:
                    break

        return auctions

    def _parse_results(self, results: list[dict[str, Any]]) -> list[Auction]:
        """Parse query results, skipping entries that are not auctions."""
        out: list[Auction] = []
        for entry in results:
            try:
                out.append(Auction.model_validate(entry.get("data")))
            except ValidationError as e:
                logger.warning(f"Skipping malformed auction {entry.get('key')}: {e}")
                continue
        return out

    async def put(self, auction: Auction, etag: Optional[str] = None) -> bool:
        item: dict[str, Any] = {"key": auction.id, "value": auction.to_state()}
        if etag is not None:
            item["etag"] = etag
            item["options"] = {"concurrency": "first-write"}

        try:
            async with self._client() as client:
                response = await client.post(self.state_url, json=[item])
        except httpx.HTTPError as e:
            logger.error(f"State store save of {auction.id} failed: {e!r}")
            return False

        if response.status_code == 409:
            logger.warning(f"Auction {auction.id} was modified concurrently, write rejected")
            return False

        if not response.is_success:
            logger.error(f"State store save error: {response.status_code} - {response.text}")
            return False

        return True

    async def delete(self, auction_id: str) -> bool:
        url = f"{self.state_url}/{auction_id}"

        try:
            async with self._client() as client:
                response = await client.delete(url)
        except httpx.HTTPError as e:
            logger.error(f"State store DELETE {auction_id} failed: {e!r}")
            return False

        if not response.is_success:
            logger.error(f"State store DELETE error: {response.status_code} - {response.text}")
            return False

        return True
