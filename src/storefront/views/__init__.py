"""Headless view stubs and the bundle the presenter is wired to.

``ViewSet`` holds the long-lived views (header, gallery, modal, the two
checkout forms) and factories for the short-lived ones (cards, basket,
success screen), which the presenter builds afresh on every render.
"""

from collections.abc import Callable
from dataclasses import dataclass, fields
from functools import partial

from shared.events.bus import EventBus
from shared.exceptions import ConfigurationError
from storefront.views.card import BasketCard, CatalogCard, PreviewCard
from storefront.views.forms import ContactsFormView, OrderFormView, TouchedFieldSet
from storefront.views.page import BasketView, CatalogView, HeaderView, ModalView, SuccessView


@dataclass
class ViewSet:
    header: HeaderView
    catalog: CatalogView
    modal: ModalView
    order_form: OrderFormView
    contacts_form: ContactsFormView
    catalog_card: Callable[..., CatalogCard]
    preview_card: Callable[..., PreviewCard]
    basket_card: Callable[..., BasketCard]
    basket: Callable[[], BasketView]
    success: Callable[[], SuccessView]

    def ensure_complete(self) -> None:
        """Raise ``ConfigurationError`` if any collaborator is missing."""
        missing = [f.name for f in fields(self) if getattr(self, f.name) is None]
        if missing:
            raise ConfigurationError(f"Missing view collaborator(s): {', '.join(missing)}")


def build_views(events: EventBus, currency: str = "synapses") -> ViewSet:
    """Build the default headless view bundle."""
    return ViewSet(
        header=HeaderView(events),
        catalog=CatalogView(),
        modal=ModalView(events),
        order_form=OrderFormView(events),
        contacts_form=ContactsFormView(events),
        catalog_card=partial(CatalogCard, currency=currency),
        preview_card=partial(PreviewCard, currency=currency),
        basket_card=partial(BasketCard, currency=currency),
        basket=partial(BasketView, events, currency=currency),
        success=partial(SuccessView, events, currency=currency),
    )


__all__ = [
    "BasketCard",
    "BasketView",
    "CatalogCard",
    "CatalogView",
    "ContactsFormView",
    "HeaderView",
    "ModalView",
    "OrderFormView",
    "PreviewCard",
    "SuccessView",
    "TouchedFieldSet",
    "ViewSet",
    "build_views",
]
