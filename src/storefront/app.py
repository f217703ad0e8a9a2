"""Storefront composition root.

Builds one event bus and injects it into every store, the view stubs and the
presenter. Nothing here is process-global: each call to
``create_storefront`` yields an independent application.

Usage:
    storefront = create_storefront()
    await storefront.start()
"""

from dataclasses import dataclass

import structlog

from catalogue.product.store import CatalogStore
from identity.buyer.store import BuyerStore
from identity.buyer.validation import BuyerValidator
from ordering.cart.store import CartStore
from shared.events.bus import EventBus
from storefront.api.port import ShopServicePort
from storefront.api.service import ApiService
from storefront.config import Settings, get_settings
from storefront.presenter import Presenter
from storefront.views import ViewSet, build_views

logger = structlog.get_logger(__name__)


@dataclass
class Storefront:
    events: EventBus
    catalog: CatalogStore
    cart: CartStore
    buyer: BuyerStore
    service: ShopServicePort
    views: ViewSet
    presenter: Presenter

    async def start(self) -> bool:
        """Load the catalogue; the single network call made at startup."""
        logger.info("storefront_starting")
        return await self.presenter.load_products()


def create_storefront(
    settings: Settings | None = None,
    service: ShopServicePort | None = None,
    views: ViewSet | None = None,
    events: EventBus | None = None,
) -> Storefront:
    """Wire up an application.

    A custom ``views`` bundle must have been built on the same ``events`` bus.
    """
    settings = settings or get_settings()

    events = events or EventBus()
    validator = BuyerValidator(
        phone_pattern=settings.phone_pattern,
        check_format=settings.strict_contact_format,
    )
    catalog = CatalogStore(events)
    cart = CartStore(events)
    buyer = BuyerStore(events, validator)

    if service is None:
        service = ApiService(settings.api_url, timeout=settings.request_timeout)
    if views is None:
        views = build_views(events, currency=settings.currency_label)

    presenter = Presenter(events, catalog, cart, buyer, service, views, cdn_url=settings.cdn_url)

    return Storefront(
        events=events,
        catalog=catalog,
        cart=cart,
        buyer=buyer,
        service=service,
        views=views,
        presenter=presenter,
    )
