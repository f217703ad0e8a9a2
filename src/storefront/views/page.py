"""Page-level view stubs: header, gallery, modal, basket and success screen.

These views emit semantic events on user interaction and otherwise only do
what the presenter tells them through ``render`` and explicit setters.
"""

from shared.events.bus import EventBus
from shared.events.ordering import (
    BasketCleared,
    BasketOpened,
    CheckoutInitiated,
    ModalClosed,
    SuccessClosed,
)
from storefront.views.base import Element, format_amount, render_fields


class HeaderView:
    def __init__(self, events: EventBus) -> None:
        self.events = events
        self._counter = Element("header__basket-counter", text="0")
        self._basket_button = Element("header__basket", children=[self._counter])
        self.container = Element("header", children=[self._basket_button])
        self._basket_button.add_listener("click", lambda: self.events.publish(BasketOpened()))

    def render(self, **fields) -> Element:
        return render_fields(self, fields)

    @property
    def counter(self) -> int:
        return int(self._counter.text)

    def set_counter(self, value: int) -> None:
        self._counter.text = str(value)

    def click_basket(self) -> None:
        self._basket_button.dispatch("click")


class CatalogView:
    """The gallery: a flat list of catalogue cards, replaced on every render."""

    def __init__(self) -> None:
        self.container = Element("gallery")

    def render(self, **fields) -> Element:
        return render_fields(self, fields)

    @property
    def cards(self) -> list[Element]:
        return list(self.container.children)

    def set_catalog(self, cards: list[Element]) -> None:
        self.container.replace_children(*cards)


class ModalView:
    """Single modal slot. User dismissal emits ``modal:closed``."""

    def __init__(self, events: EventBus) -> None:
        self.events = events
        self._content = Element("modal__content")
        self._close_button = Element("modal__close")
        self.container = Element("modal", children=[self._close_button, self._content])
        self._close_button.add_listener("click", self.dismiss)

    def render(self, **fields) -> Element:
        return render_fields(self, fields)

    @property
    def is_open(self) -> bool:
        return "modal_active" in self.container.classes

    @property
    def content(self) -> Element | None:
        return self._content.children[0] if self._content.children else None

    def set_content(self, content: Element) -> None:
        self._content.replace_children(content)

    def open(self) -> None:
        self.container.toggle_class("modal_active", True)

    def close(self) -> None:
        self.container.toggle_class("modal_active", False)

    def dismiss(self) -> None:
        """Close on user request (close button or overlay click)."""
        self.close()
        self.events.publish(ModalClosed())


class BasketView:
    def __init__(self, events: EventBus, currency: str = "synapses") -> None:
        self.events = events
        self.currency = currency
        self._list = Element("basket__list")
        self._empty_message = Element("basket__empty-message", text="Basket is empty")
        self._total = Element("basket__price", text=f"0 {currency}")
        self._checkout_button = Element("basket__button", text="Checkout", disabled=True)
        self.container = Element(
            "basket",
            children=[self._list, self._empty_message, self._total, self._checkout_button],
        )
        self._checkout_button.add_listener("click", lambda: self.events.publish(CheckoutInitiated()))

    def render(self, **fields) -> Element:
        return render_fields(self, fields)

    @property
    def items(self) -> list[Element]:
        return list(self._list.children)

    @property
    def total_text(self) -> str:
        return self._total.text

    @property
    def checkout_enabled(self) -> bool:
        return not self._checkout_button.disabled

    def set_items(self, items: list[Element]) -> None:
        self._list.replace_children(*items)
        self._empty_message.visible = not items

    def set_total(self, total: float) -> None:
        self._total.text = f"{format_amount(total)} {self.currency}"

    def toggle_checkout_button(self, enabled: bool) -> None:
        self._checkout_button.disabled = not enabled

    def click_checkout(self) -> None:
        self._checkout_button.dispatch("click")

    def clear(self) -> None:
        """Empty the basket on user request."""
        self.events.publish(BasketCleared())


class SuccessView:
    def __init__(self, events: EventBus, currency: str = "synapses") -> None:
        self.events = events
        self.currency = currency
        self._title = Element("order-success__title", text="Order placed")
        self._description = Element("order-success__description")
        self._close_button = Element("order-success__close", text="Back to shopping")
        self.container = Element(
            "order-success",
            children=[self._title, self._description, self._close_button],
        )
        self._close_button.add_listener("click", lambda: self.events.publish(SuccessClosed()))

    def render(self, **fields) -> Element:
        return render_fields(self, fields)

    @property
    def description(self) -> str:
        return self._description.text

    def set_total(self, total: float) -> None:
        self._description.text = f"Charged {format_amount(total)} {self.currency}"

    def click_close(self) -> None:
        self._close_button.dispatch("click")
