"""Order submission payload and the server's confirmation.

An ``Order`` exists only for the duration of a single submission request: it
is assembled from a fully populated buyer record and a non-empty cart, sent,
and discarded.
"""

from pydantic import BaseModel, Field

from catalogue.product.product import Product
from identity.buyer.data import BuyerData, Payment


class IncompleteOrderError(ValueError):
    """Raised when an order is assembled from incomplete buyer or cart data."""


class Order(BaseModel):
    payment: Payment
    email: str
    phone: str
    address: str
    items: list[str] = Field(min_length=1)
    total: float = Field(ge=0)

    model_config = {"frozen": True, "use_enum_values": True}

    @classmethod
    def build(cls, buyer: BuyerData, items: list[Product], total: float) -> "Order":
        """Assemble the payload from buyer data and cart contents.

        Contact fields are sent with surrounding whitespace removed.
        """
        missing = [
            field
            for field in ("payment", "email", "phone", "address")
            if not (getattr(buyer, field) or "").strip()
        ]
        if missing:
            raise IncompleteOrderError(f"Buyer data incomplete: {', '.join(missing)}")
        if not items:
            raise IncompleteOrderError("Cannot build an order from an empty cart")

        return cls(
            payment=buyer.payment,
            email=buyer.email.strip(),
            phone=buyer.phone.strip(),
            address=buyer.address.strip(),
            items=[item.id for item in items],
            total=total,
        )


class OrderConfirmation(BaseModel):
    """Response body of the order endpoint."""

    id: str
    total: float

    model_config = {"frozen": True}
