"""Cart store: the products the buyer intends to order.

The store does not deduplicate: by convention the presenter never adds a
product that is already present, and ``remove_item`` drops every entry with
the given id. Totals are recomputed from the current items on every call,
counting priceless products as zero.
"""

import structlog

from catalogue.product.product import Product
from shared.events.bus import EventBus
from shared.events.ordering import CartChanged

logger = structlog.get_logger(__name__)


class CartStore:
    def __init__(self, events: EventBus) -> None:
        self._events = events
        self._items: list[Product] = []

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def get_items(self) -> list[Product]:
        return list(self._items)

    def get_total(self) -> float:
        return sum((item.price or 0) for item in self._items)

    def get_count(self) -> int:
        return len(self._items)

    def contains(self, product_id: str) -> bool:
        return any(item.id == product_id for item in self._items)

    def is_empty(self) -> bool:
        return not self._items

    # -------------------------------------------------------------------
    # Mutators
    # -------------------------------------------------------------------
    def add_item(self, item: Product) -> None:
        self._items.append(item)
        logger.debug("cart_item_added", product_id=item.id, count=len(self._items))
        self._notify()

    def remove_item(self, product_id: str) -> None:
        """Remove every entry whose id matches ``product_id``."""
        self._items = [item for item in self._items if item.id != product_id]
        logger.debug("cart_item_removed", product_id=product_id, count=len(self._items))
        self._notify()

    def clear(self) -> None:
        self._items = []
        self._notify()

    def _notify(self) -> None:
        self._events.publish(
            CartChanged(
                items=self.get_items(),
                total=self.get_total(),
                count=self.get_count(),
            )
        )
