"""Product cards: catalogue tile, preview, and basket row.

The three card types share display fields (title, category, price, image)
through the module-level helpers below rather than through a common base
class; each card declares only the setters it actually shows.
"""

from collections.abc import Callable

from storefront.views.base import Element, format_price, render_fields

CATEGORY_CLASSES = {
    "soft skill": "card__category_soft",
    "hard skill": "card__category_hard",
    "button": "card__category_button",
    "additional": "card__category_additional",
    "other": "card__category_other",
}


def _apply_category(element: Element, value: str) -> None:
    element.text = value
    for css_class in CATEGORY_CLASSES.values():
        element.classes.discard(css_class)
    element.classes.add(CATEGORY_CLASSES.get(value, CATEGORY_CLASSES["other"]))


def _apply_image(element: Element, src: str, alt: str) -> None:
    element.attrs["src"] = src
    element.attrs["alt"] = alt


class CatalogCard:
    """Gallery tile. Clicking anywhere on it selects the product."""

    def __init__(self, on_click: Callable[[], None] | None = None, currency: str = "synapses") -> None:
        self.currency = currency
        self._category = Element("card__category")
        self._title = Element("card__title")
        self._image = Element("card__image")
        self._price = Element("card__price")
        self.container = Element(
            "card",
            children=[self._category, self._title, self._image, self._price],
        )
        if on_click is not None:
            self.container.add_listener("click", on_click)

    def render(self, **fields) -> Element:
        return render_fields(self, fields)

    def set_id(self, value: str) -> None:
        self.container.attrs["data-id"] = value

    def set_title(self, value: str) -> None:
        self._title.text = value

    def set_category(self, value: str) -> None:
        _apply_category(self._category, value)

    def set_image(self, value: str) -> None:
        _apply_image(self._image, value, self._title.text)

    def set_price(self, value: float | None) -> None:
        self._price.text = format_price(value, self.currency)

    def click(self) -> None:
        self.container.dispatch("click")


class PreviewCard:
    """Full product view with the add/remove action button."""

    def __init__(self, on_button_click: Callable[[], None] | None = None, currency: str = "synapses") -> None:
        self.currency = currency
        self._category = Element("card__category")
        self._title = Element("card__title")
        self._image = Element("card__image")
        self._description = Element("card__text")
        self._price = Element("card__price")
        self._button = Element("card__button")
        self.container = Element(
            "card_full",
            children=[
                self._image,
                self._category,
                self._title,
                self._description,
                self._price,
                self._button,
            ],
        )
        if on_button_click is not None:
            self._button.add_listener("click", on_button_click)

    def render(self, **fields) -> Element:
        return render_fields(self, fields)

    @property
    def button_text(self) -> str:
        return self._button.text

    @property
    def button_disabled(self) -> bool:
        return self._button.disabled

    def set_id(self, value: str) -> None:
        self.container.attrs["data-id"] = value

    def set_title(self, value: str) -> None:
        self._title.text = value

    def set_description(self, value: str) -> None:
        self._description.text = value

    def set_category(self, value: str) -> None:
        _apply_category(self._category, value)

    def set_image(self, value: str) -> None:
        _apply_image(self._image, value, self._title.text)

    def set_price(self, value: float | None) -> None:
        self._price.text = format_price(value, self.currency)

    def set_button_text(self, value: str) -> None:
        self._button.text = value

    def set_button_disabled(self, value: bool) -> None:
        self._button.disabled = value

    def click_button(self) -> None:
        self._button.dispatch("click")


class BasketCard:
    """Numbered basket row with a delete control."""

    def __init__(self, on_delete: Callable[[], None] | None = None, currency: str = "synapses") -> None:
        self.currency = currency
        self._index = Element("basket__item-index")
        self._title = Element("card__title")
        self._price = Element("card__price")
        self._delete = Element("basket__item-delete")
        self.container = Element(
            "basket__item",
            children=[self._index, self._title, self._price, self._delete],
        )
        if on_delete is not None:
            self._delete.add_listener("click", on_delete)

    def render(self, **fields) -> Element:
        return render_fields(self, fields)

    def set_id(self, value: str) -> None:
        self.container.attrs["data-id"] = value

    def set_index(self, value: int) -> None:
        self._index.text = str(value)

    def set_title(self, value: str) -> None:
        self._title.text = value

    def set_price(self, value: float | None) -> None:
        self._price.text = format_price(value, self.currency)

    def click_delete(self) -> None:
        self._delete.dispatch("click")
