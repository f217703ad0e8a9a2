"""Event contracts for buyer data."""

from typing import Literal

from pydantic import BaseModel

from identity.buyer.data import BuyerData

BUYER_CHANGED = "buyer:changed"


class BuyerChanged(BaseModel):
    """The buyer record changed; ``data`` is the full merged record."""

    name: Literal["buyer:changed"] = BUYER_CHANGED
    data: BuyerData
