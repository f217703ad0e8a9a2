"""Tests for the event payload models and the name-keyed vocabulary."""

import pytest
from pydantic import ValidationError

from catalogue.product.product import Product
from shared.events.catalogue import CARD_SELECT, CardSelected
from shared.events.ordering import (
    BASKET_OPEN,
    ORDER_FIELD_CHANGED,
    BasketOpened,
    OrderFieldChanged,
)
from shared.events.vocabulary import EVENT_TYPES, coerce, parse_event


class TestEventTypes:
    def test_every_event_name_is_registered(self):
        assert set(EVENT_TYPES) == {
            "catalog:changed",
            "selected-item:changed",
            "catalog:load-failed",
            "card:select",
            "card:button-click",
            "buyer:changed",
            "cart:changed",
            "basket:open",
            "basket:remove",
            "basket:clear",
            "basket:checkout",
            "payment:selected",
            "order:field-changed",
            "contacts:field-changed",
            "order:submit",
            "contacts:submit",
            "order:placed",
            "order:failed",
            "success:close",
            "modal:closed",
        }

    def test_models_carry_their_name(self):
        for name, model in EVENT_TYPES.items():
            assert model.model_fields["name"].default == name


class TestParseEvent:
    def test_parses_by_name(self):
        event = parse_event({"name": "order:field-changed", "field": "address", "value": "x"})

        assert isinstance(event, OrderFieldChanged)
        assert event.value == "x"

    def test_unknown_name_is_rejected(self):
        with pytest.raises(ValidationError):
            parse_event({"name": "no:such-event"})

    def test_missing_fields_are_rejected(self):
        with pytest.raises(ValidationError):
            parse_event({"name": "basket:remove"})


class TestCoerce:
    def test_model_is_returned_unchanged(self):
        event = BasketOpened()
        assert coerce(BASKET_OPEN, event) is event

    def test_none_payload_builds_empty_event(self):
        assert isinstance(coerce(BASKET_OPEN), BasketOpened)

    def test_mapping_payload_is_validated(self):
        event = coerce(ORDER_FIELD_CHANGED, {"field": "address", "value": "Main st 1"})

        assert event == OrderFieldChanged(field="address", value="Main st 1")

    def test_nested_models_are_validated(self):
        event = coerce(CARD_SELECT, {"product": {"id": "p-1", "title": "Pen", "price": 10}})

        assert isinstance(event, CardSelected)
        assert event.product == Product(id="p-1", title="Pen", price=10)
