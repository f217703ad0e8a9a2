"""Catalogue store: the loaded product list and the product under preview.

The product list is replaced wholesale on load; the selection persists until
overwritten. Every mutator updates state first and then publishes exactly one
notification carrying a snapshot of the new state.
"""

import structlog

from catalogue.product.product import Product
from shared.events.bus import EventBus
from shared.events.catalogue import CatalogChanged, SelectedItemChanged

logger = structlog.get_logger(__name__)


class CatalogStore:
    def __init__(self, events: EventBus) -> None:
        self._events = events
        self._items: list[Product] = []
        self._selected_item: Product | None = None

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def get_items(self) -> list[Product]:
        return list(self._items)

    def get_item_by_id(self, product_id: str) -> Product | None:
        return next((item for item in self._items if item.id == product_id), None)

    def get_selected_item(self) -> Product | None:
        return self._selected_item

    # -------------------------------------------------------------------
    # Mutators
    # -------------------------------------------------------------------
    def set_items(self, items: list[Product]) -> None:
        """Replace the whole product list."""
        self._items = list(items)
        logger.debug("catalog_items_set", count=len(self._items))
        self._events.publish(CatalogChanged(items=self.get_items()))

    def set_selected_item(self, item: Product | None) -> None:
        self._selected_item = item
        self._events.publish(SelectedItemChanged(item=item))
