"""Event contracts for the catalogue: store notifications and card interactions.

Every payload carries its own ``name`` literal, so the union in
``shared.events.vocabulary`` can discriminate on it.
"""

from typing import Literal

from pydantic import BaseModel

from catalogue.product.product import Product

CATALOG_CHANGED = "catalog:changed"
SELECTED_ITEM_CHANGED = "selected-item:changed"
CATALOG_LOAD_FAILED = "catalog:load-failed"
CARD_SELECT = "card:select"
CARD_BUTTON_CLICK = "card:button-click"


class CatalogChanged(BaseModel):
    """The product list was replaced."""

    name: Literal["catalog:changed"] = CATALOG_CHANGED
    items: list[Product]


class SelectedItemChanged(BaseModel):
    """The product shown in the preview changed."""

    name: Literal["selected-item:changed"] = SELECTED_ITEM_CHANGED
    item: Product | None = None


class CatalogLoadFailed(BaseModel):
    name: Literal["catalog:load-failed"] = CATALOG_LOAD_FAILED
    message: str


class CardSelected(BaseModel):
    """A catalogue card was clicked."""

    name: Literal["card:select"] = CARD_SELECT
    product: Product


class CardButtonClicked(BaseModel):
    """The preview's add/remove action was clicked."""

    name: Literal["card:button-click"] = CARD_BUTTON_CLICK
    product_id: str
