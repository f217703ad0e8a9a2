"""Storefront presenter: turns UI events into store mutations and store
notifications into render calls.

Views never touch stores and stores never touch views: everything flows
through the injected event bus. Catalogue and basket lists are rebuilt from
scratch on every store notification, so what is rendered always mirrors the
store contents in store order. The checkout steps are delegated to
``CheckoutFlow``, which listens on the same bus.
"""

from functools import partial

import structlog

from catalogue.product.product import Product
from catalogue.product.store import CatalogStore
from identity.buyer.store import BuyerStore
from ordering.cart.store import CartStore
from ordering.checkout.flow import CheckoutFlow, CheckoutStep
from shared.events.bus import EventBus
from shared.events.catalogue import (
    CARD_BUTTON_CLICK,
    CARD_SELECT,
    CATALOG_CHANGED,
    SELECTED_ITEM_CHANGED,
    CardButtonClicked,
    CardSelected,
    CatalogLoadFailed,
)
from shared.events.ordering import (
    BASKET_CLEAR,
    BASKET_OPEN,
    BASKET_REMOVE,
    CART_CHANGED,
    MODAL_CLOSED,
    SUCCESS_CLOSE,
    BasketItemRemoved,
)
from shared.events.vocabulary import coerce
from shared.exceptions import ApiError, ConfigurationError
from storefront.api.port import ShopServicePort
from storefront.views import BasketView, PreviewCard, ViewSet

logger = structlog.get_logger(__name__)

ADD_TO_BASKET = "Add to basket"
REMOVE_FROM_BASKET = "Remove from basket"
UNAVAILABLE = "Unavailable"


class Presenter:
    def __init__(
        self,
        events: EventBus,
        catalog: CatalogStore,
        cart: CartStore,
        buyer: BuyerStore,
        service: ShopServicePort,
        views: ViewSet,
        cdn_url: str = "",
    ) -> None:
        if views is None:
            raise ConfigurationError("Presenter requires a view set")
        views.ensure_complete()

        self.events = events
        self.catalog = catalog
        self.cart = cart
        self.buyer = buyer
        self.service = service
        self.views = views
        self.cdn_url = cdn_url

        self.basket_view: BasketView | None = None
        self.preview: PreviewCard | None = None
        self._catalog_request = 0

        self.checkout = CheckoutFlow(events, cart, buyer, service, views)

        events.on(CATALOG_CHANGED, self.render_catalog)
        events.on(CART_CHANGED, self._on_cart_changed)
        events.on(SELECTED_ITEM_CHANGED, self.render_preview)
        events.on(CARD_SELECT, self._on_card_select)
        events.on(CARD_BUTTON_CLICK, self._on_card_button_click)
        events.on(BASKET_OPEN, self.open_basket)
        events.on(BASKET_REMOVE, self._on_basket_remove)
        events.on(BASKET_CLEAR, self._on_basket_clear)
        events.on(SUCCESS_CLOSE, self._drop_basket_view)
        events.on(MODAL_CLOSED, self._drop_basket_view)

    @property
    def step(self) -> CheckoutStep:
        return self.checkout.step

    # -------------------------------------------------------------------
    # Catalogue loading
    # -------------------------------------------------------------------
    async def load_products(self) -> bool:
        """Fetch the product list and hand it to the catalogue store.

        Only the most recent request is applied: a response that arrives
        after a newer load was started is discarded. A failed fetch leaves
        the catalogue as it was.
        """
        self._catalog_request += 1
        request_id = self._catalog_request

        try:
            products = await self.service.get_product_list()
        except ApiError as exc:
            if request_id != self._catalog_request:
                logger.debug("stale_catalog_failure_ignored", request_id=request_id)
                return False
            logger.error("catalog_load_failed", error=str(exc))
            self.events.publish(CatalogLoadFailed(message=exc.message))
            return False

        if request_id != self._catalog_request:
            logger.info("stale_catalog_response_discarded", request_id=request_id)
            return False

        self.catalog.set_items(products)
        logger.info("catalog_loaded", count=len(products))
        return True

    async def wait_idle(self) -> None:
        await self.checkout.wait_idle()

    # -------------------------------------------------------------------
    # Catalogue and preview
    # -------------------------------------------------------------------
    def render_catalog(self, payload=None) -> None:
        cards = []
        for product in self.catalog.get_items():
            card = self.views.catalog_card(
                on_click=partial(self.events.publish, CardSelected(product=product)),
            )
            cards.append(
                card.render(
                    id=product.id,
                    title=product.title,
                    image=self._image_url(product),
                    category=product.category,
                    price=product.price,
                )
            )
        self.views.catalog.render(catalog=cards)

    def render_preview(self, payload=None) -> None:
        product = self.catalog.get_selected_item()
        if product is None:
            return

        card = self.views.preview_card(
            on_button_click=partial(self.events.publish, CardButtonClicked(product_id=product.id)),
        )
        card.render(
            id=product.id,
            title=product.title,
            description=product.description,
            image=self._image_url(product),
            category=product.category,
            price=product.price,
        )

        if product.is_priceless:
            card.render(button_text=UNAVAILABLE, button_disabled=True)
        elif self.cart.contains(product.id):
            card.render(button_text=REMOVE_FROM_BASKET, button_disabled=False)
        else:
            card.render(button_text=ADD_TO_BASKET, button_disabled=False)

        self.preview = card
        self.views.modal.set_content(card.container)
        self.views.modal.open()

    def _on_card_select(self, payload) -> None:
        event = coerce(CARD_SELECT, payload)
        self.catalog.set_selected_item(event.product)

    def _on_card_button_click(self, payload) -> None:
        event = coerce(CARD_BUTTON_CLICK, payload)
        product = self.catalog.get_item_by_id(event.product_id)
        if product is None:
            logger.warning("unknown_product", product_id=event.product_id)
            return

        if self.cart.contains(product.id):
            self.cart.remove_item(product.id)
        elif product.is_priceless:
            logger.warning("priceless_product_not_added", product_id=product.id)
            return
        else:
            self.cart.add_item(product)

        self.render_preview()

    # -------------------------------------------------------------------
    # Header and basket
    # -------------------------------------------------------------------
    def _on_cart_changed(self, payload=None) -> None:
        self.views.header.render(counter=self.cart.get_count())
        self.update_basket()

    def open_basket(self, payload=None) -> None:
        self.basket_view = self.views.basket()
        self.update_basket()
        self.views.modal.set_content(self.basket_view.container)
        self.views.modal.open()

    def update_basket(self) -> None:
        if self.basket_view is None:
            return

        items = self.cart.get_items()
        rows = []
        for index, item in enumerate(items, start=1):
            row = self.views.basket_card(
                on_delete=partial(self.events.publish, BasketItemRemoved(id=item.id)),
            )
            rows.append(row.render(id=item.id, title=item.title, price=item.price, index=index))

        self.basket_view.render(items=rows, total=self.cart.get_total())
        self.basket_view.toggle_checkout_button(bool(items))

    def _on_basket_remove(self, payload) -> None:
        event = coerce(BASKET_REMOVE, payload)
        self.cart.remove_item(event.id)

    def _on_basket_clear(self, payload=None) -> None:
        self.cart.clear()

    def _drop_basket_view(self, payload=None) -> None:
        self.basket_view = None

    def _image_url(self, product: Product) -> str:
        return f"{self.cdn_url}{product.image}"
