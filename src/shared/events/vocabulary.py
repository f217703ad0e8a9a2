"""The complete event vocabulary exchanged between stores, presenter and views.

``StorefrontEvent`` is a discriminated union keyed by event name, which gives
each handler a statically known payload shape. ``coerce`` turns whatever
arrived on the bus (a payload model, a plain mapping from an imperative
callback site, or nothing) into the model registered for that name.
"""

from collections.abc import Mapping
from typing import Annotated, Any, Union

from pydantic import BaseModel, Field, TypeAdapter

from shared.events.catalogue import (
    CardButtonClicked,
    CardSelected,
    CatalogChanged,
    CatalogLoadFailed,
    SelectedItemChanged,
)
from shared.events.identity import BuyerChanged
from shared.events.ordering import (
    BasketCleared,
    BasketItemRemoved,
    BasketOpened,
    CartChanged,
    CheckoutInitiated,
    ContactsFieldChanged,
    ContactsStepSubmitted,
    ModalClosed,
    OrderFailed,
    OrderFieldChanged,
    OrderPlaced,
    OrderStepSubmitted,
    PaymentSelected,
    SuccessClosed,
)

_EVENT_MODELS = (
    CatalogChanged,
    SelectedItemChanged,
    CatalogLoadFailed,
    CardSelected,
    CardButtonClicked,
    BuyerChanged,
    CartChanged,
    BasketOpened,
    BasketItemRemoved,
    BasketCleared,
    CheckoutInitiated,
    PaymentSelected,
    OrderFieldChanged,
    ContactsFieldChanged,
    OrderStepSubmitted,
    ContactsStepSubmitted,
    OrderPlaced,
    OrderFailed,
    SuccessClosed,
    ModalClosed,
)

StorefrontEvent = Annotated[Union[_EVENT_MODELS], Field(discriminator="name")]

EVENT_TYPES: dict[str, type[BaseModel]] = {
    model.model_fields["name"].default: model for model in _EVENT_MODELS
}

_adapter = TypeAdapter(StorefrontEvent)


def parse_event(data: Mapping[str, Any]) -> BaseModel:
    """Validate a raw mapping (with a ``name`` key) into its payload model."""
    return _adapter.validate_python(dict(data))


def coerce(name: str, payload: Any = None) -> BaseModel:
    """Return ``payload`` as the model registered for event ``name``."""
    if isinstance(payload, BaseModel):
        return payload
    return parse_event({**(payload or {}), "name": name})
