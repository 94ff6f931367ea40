"""Offer model: a bid or a buy-it-now purchase."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Offer(BaseModel):
    """A priced, timestamped proposal made by a user on an auction."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    user_id: str
    price: float = Field(allow_inf_nan=False)
    creation_timestamp: int  # epoch milliseconds

    def __repr__(self) -> str:
        return f"<Offer(user_id={self.user_id}, price={self.price})>"
