"""Auction model as persisted in the state store."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from auction_api.models.offer import Offer


class Auction(BaseModel):
    """An item listed for auction with a starting bid and a buy-it-now price.

    Instances are frozen. Placing a bid or recording a purchase produces a new
    Auction through ``with_offer`` / ``with_purchase``; the stored record is
    only replaced once the repository write goes through.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    id: str = Field(min_length=1)
    seller_id: str
    title: str
    description: str = ""

    # Pricing
    start_bid: float = Field(ge=0, allow_inf_nan=False)
    bin_price: float = Field(allow_inf_nan=False)

    # Opaque to the service, stored as sent
    image_data: Optional[str] = Field(default=None, alias="base64Image")

    # Timestamps (epoch milliseconds)
    creation_timestamp: int
    expiration_timestamp: int

    # Bid history in acceptance order, highest bid last
    offers: tuple[Offer, ...] = Field(default=(), alias="bids")
    purchase: Optional[Offer] = None

    @model_validator(mode="after")
    def check_window(self) -> "Auction":
        if self.expiration_timestamp <= self.creation_timestamp:
            raise ValueError("expirationTimestamp must be after creationTimestamp")
        return self

    @property
    def highest_offer(self) -> Optional[Offer]:
        return self.offers[-1] if self.offers else None

    @property
    def is_purchased(self) -> bool:
        return self.purchase is not None

    def is_expired(self, now_ms: int) -> bool:
        return now_ms >= self.expiration_timestamp

    def with_offer(self, offer: Offer) -> "Auction":
        return self.model_copy(update={"offers": self.offers + (offer,)})

    def with_purchase(self, offer: Offer) -> "Auction":
        return self.model_copy(update={"purchase": offer})

    def to_state(self) -> dict:
        """JSON-compatible dict in the shape stored and served over HTTP."""
        return self.model_dump(mode="json", by_alias=True)

    def __repr__(self) -> str:
        return f"<Auction(id={self.id}, bids={len(self.offers)}, purchased={self.is_purchased})>"
