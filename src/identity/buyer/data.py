"""Buyer data captured across the two checkout steps."""

from enum import Enum

from pydantic import BaseModel, field_validator

BUYER_FIELDS = ("payment", "email", "phone", "address")
ORDER_STEP_FIELDS = ("payment", "address")
CONTACTS_STEP_FIELDS = ("email", "phone")


class Payment(str, Enum):
    CARD = "card"
    CASH = "cash"

    @classmethod
    def values(cls) -> tuple[str, ...]:
        return tuple(member.value for member in cls)


class BuyerData(BaseModel):
    """Partial buyer record, filled in incrementally.

    ``payment`` keeps the raw string the UI sent so that an unrecognised
    method stays representable and is reported by validation instead of
    being rejected on write.
    """

    payment: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None

    @field_validator("payment", mode="before")
    @classmethod
    def _payment_value(cls, value):
        if isinstance(value, Payment):
            return value.value
        return value

    def is_empty(self) -> bool:
        return all(getattr(self, field) is None for field in BUYER_FIELDS)
