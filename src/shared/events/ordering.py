"""Event contracts for the basket and the two-step checkout."""

from typing import Literal

from pydantic import BaseModel

from catalogue.product.product import Product

CART_CHANGED = "cart:changed"
BASKET_OPEN = "basket:open"
BASKET_REMOVE = "basket:remove"
BASKET_CLEAR = "basket:clear"
BASKET_CHECKOUT = "basket:checkout"
PAYMENT_SELECTED = "payment:selected"
ORDER_FIELD_CHANGED = "order:field-changed"
CONTACTS_FIELD_CHANGED = "contacts:field-changed"
ORDER_SUBMIT = "order:submit"
CONTACTS_SUBMIT = "contacts:submit"
ORDER_PLACED = "order:placed"
ORDER_FAILED = "order:failed"
SUCCESS_CLOSE = "success:close"
MODAL_CLOSED = "modal:closed"


# ---------------------------------------------------------------------------
# Store notifications
# ---------------------------------------------------------------------------
class CartChanged(BaseModel):
    name: Literal["cart:changed"] = CART_CHANGED
    items: list[Product]
    total: float
    count: int


# ---------------------------------------------------------------------------
# Basket view
# ---------------------------------------------------------------------------
class BasketOpened(BaseModel):
    name: Literal["basket:open"] = BASKET_OPEN


class BasketItemRemoved(BaseModel):
    name: Literal["basket:remove"] = BASKET_REMOVE
    id: str


class BasketCleared(BaseModel):
    name: Literal["basket:clear"] = BASKET_CLEAR


class CheckoutInitiated(BaseModel):
    name: Literal["basket:checkout"] = BASKET_CHECKOUT


# ---------------------------------------------------------------------------
# Checkout forms
# ---------------------------------------------------------------------------
class PaymentSelected(BaseModel):
    name: Literal["payment:selected"] = PAYMENT_SELECTED
    payment: str


class OrderFieldChanged(BaseModel):
    name: Literal["order:field-changed"] = ORDER_FIELD_CHANGED
    field: str
    value: str


class ContactsFieldChanged(BaseModel):
    name: Literal["contacts:field-changed"] = CONTACTS_FIELD_CHANGED
    field: str
    value: str


class OrderStepSubmitted(BaseModel):
    name: Literal["order:submit"] = ORDER_SUBMIT
    payment: str
    address: str


class ContactsStepSubmitted(BaseModel):
    name: Literal["contacts:submit"] = CONTACTS_SUBMIT
    email: str
    phone: str


# ---------------------------------------------------------------------------
# Submission outcome and modal lifecycle
# ---------------------------------------------------------------------------
class OrderPlaced(BaseModel):
    name: Literal["order:placed"] = ORDER_PLACED
    order_id: str
    total: float


class OrderFailed(BaseModel):
    name: Literal["order:failed"] = ORDER_FAILED
    message: str


class SuccessClosed(BaseModel):
    name: Literal["success:close"] = SUCCESS_CLOSE


class ModalClosed(BaseModel):
    name: Literal["modal:closed"] = MODAL_CLOSED
