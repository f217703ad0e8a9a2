"""Tests for the headless view stubs: elements, cards, page views and forms."""

import pytest

from shared.events.ordering import (
    BasketCleared,
    BasketOpened,
    CheckoutInitiated,
    ContactsFieldChanged,
    ContactsStepSubmitted,
    ModalClosed,
    OrderFieldChanged,
    OrderStepSubmitted,
    PaymentSelected,
    SuccessClosed,
)
from shared.exceptions import ConfigurationError
from storefront.views import (
    BasketCard,
    BasketView,
    CatalogCard,
    ContactsFormView,
    HeaderView,
    ModalView,
    OrderFormView,
    PreviewCard,
    SuccessView,
    TouchedFieldSet,
    build_views,
)
from storefront.views.base import Element, format_amount, format_price, render_fields


@pytest.fixture
def published(events):
    """Payloads of every event emitted on the bus."""
    received = []
    events.on_all(lambda envelope: received.append(envelope.payload))
    return received


class TestElement:
    def test_dispatch_calls_listeners_in_order(self):
        element = Element("button")
        calls = []
        element.add_listener("click", lambda: calls.append(1))
        element.add_listener("click", lambda: calls.append(2))

        element.dispatch("click")

        assert calls == [1, 2]

    def test_disabled_element_swallows_clicks(self):
        element = Element("button", disabled=True)
        calls = []
        element.add_listener("click", lambda: calls.append(1))

        element.dispatch("click")

        assert calls == []

    def test_find_walks_depth_first(self):
        inner = Element("title", text="inner")
        tree = Element("card", children=[Element("body", children=[inner]), Element("title")])

        assert tree.find("title") is inner
        assert len(tree.find_all("title")) == 2
        assert tree.find("missing") is None

    def test_toggle_class(self):
        element = Element("button")
        element.toggle_class("active", True)
        assert "active" in element.classes
        element.toggle_class("active", False)
        assert "active" not in element.classes


class TestFormatting:
    def test_whole_amounts_drop_fraction(self):
        assert format_amount(750.0) == "750"
        assert format_amount(12.5) == "12.50"

    def test_priceless(self):
        assert format_price(None, "synapses") == "Priceless"
        assert format_price(10, "synapses") == "10 synapses"


class TestRenderContract:
    def test_render_calls_setters_and_returns_root(self):
        card = CatalogCard()

        root = card.render(id="p-1", title="Pen", price=100)

        assert root is card.container
        assert root.attrs["data-id"] == "p-1"
        assert root.find("card__title").text == "Pen"
        assert root.find("card__price").text == "100 synapses"

    def test_unknown_field_raises(self):
        with pytest.raises(AttributeError, match="colour"):
            render_fields(CatalogCard(), {"colour": "red"})


class TestCards:
    def test_category_class(self):
        card = CatalogCard()
        card.render(category="hard skill")
        assert "card__category_hard" in card.container.find("card__category").classes

        card.render(category="unheard-of")
        classes = card.container.find("card__category").classes
        assert classes == {"card__category_other"}

    def test_image_alt_uses_title(self):
        card = CatalogCard()
        card.render(title="Pen", image="http://cdn.test/pen.svg")

        image = card.container.find("card__image")
        assert image.attrs == {"src": "http://cdn.test/pen.svg", "alt": "Pen"}

    def test_catalog_card_click(self):
        calls = []
        card = CatalogCard(on_click=lambda: calls.append("clicked"))

        card.click()

        assert calls == ["clicked"]

    def test_preview_button(self):
        calls = []
        card = PreviewCard(on_button_click=lambda: calls.append("clicked"))
        card.render(button_text="Add to basket", button_disabled=False)

        card.click_button()

        assert card.button_text == "Add to basket"
        assert calls == ["clicked"]

    def test_disabled_preview_button_swallows_click(self):
        calls = []
        card = PreviewCard(on_button_click=lambda: calls.append("clicked"))
        card.render(button_disabled=True)

        card.click_button()

        assert calls == []

    def test_basket_card(self):
        calls = []
        card = BasketCard(on_delete=lambda: calls.append("deleted"), currency="credits")
        card.render(index=2, title="Pen", price=None)

        card.click_delete()

        assert card.container.find("basket__item-index").text == "2"
        assert card.container.find("card__price").text == "Priceless"
        assert calls == ["deleted"]


class TestPageViews:
    def test_header_counter_and_basket_click(self, events, published):
        header = HeaderView(events)
        header.render(counter=3)

        header.click_basket()

        assert header.counter == 3
        assert published == [BasketOpened()]

    def test_modal_open_close_and_dismiss(self, events, published):
        modal = ModalView(events)
        content = Element("basket")

        modal.set_content(content)
        modal.open()
        assert modal.is_open and modal.content is content

        modal.close()
        assert not modal.is_open
        assert published == []

        modal.open()
        modal.dismiss()
        assert not modal.is_open
        assert published == [ModalClosed()]

    def test_basket_view(self, events, published):
        basket = BasketView(events)
        basket.render(items=[Element("basket__item")], total=900)
        basket.toggle_checkout_button(True)

        basket.click_checkout()
        basket.clear()

        assert len(basket.items) == 1
        assert basket.total_text == "900 synapses"
        assert published == [CheckoutInitiated(), BasketCleared()]

    def test_basket_checkout_disabled_by_default(self, events, published):
        basket = BasketView(events)

        basket.click_checkout()

        assert not basket.checkout_enabled
        assert published == []

    def test_success_view(self, events, published):
        success = SuccessView(events)
        success.render(total=1200)

        success.click_close()

        assert success.description == "Charged 1200 synapses"
        assert published == [SuccessClosed()]


class TestTouchedFieldSet:
    def test_touch_and_filter(self):
        touched = TouchedFieldSet()
        touched.touch("email")

        errors = {"email": "Enter a valid email", "phone": "Enter your phone number"}

        assert touched.filter(errors) == {"email": "Enter a valid email"}

    def test_touch_if_filled_ignores_blank(self):
        touched = TouchedFieldSet()
        touched.touch_if_filled("email", "   ")
        touched.touch_if_filled("phone", "8999")

        assert list(touched) == ["phone"]

    def test_reset(self):
        touched = TouchedFieldSet()
        touched.touch("email")
        touched.reset()

        assert len(touched) == 0


class TestOrderForm:
    def test_pristine_fields_hide_errors(self, events):
        form = OrderFormView(events)

        form.set_validation_errors({"payment": "Select a payment method", "address": "Enter a delivery address"})

        assert form.visible_errors == {}
        assert form.error_text == ""

    def test_typing_touches_field(self, events, published):
        form = OrderFormView(events)

        form.input_address("")
        form.set_validation_errors({"payment": "Select a payment method", "address": "Enter a delivery address"})

        assert "address" in form.touched
        assert form.error_text == "Enter a delivery address"
        assert published == [OrderFieldChanged(field="address", value="")]

    def test_payment_click_selects_and_emits(self, events, published):
        form = OrderFormView(events)

        form.click_payment("cash")

        assert form.payment == "cash"
        assert "payment" in form.touched
        assert published == [PaymentSelected(payment="cash")]

    def test_active_payment_button_is_highlighted(self, events):
        form = OrderFormView(events)

        form.set_payment("card")

        buttons = {b.attrs["name"]: b for b in form.container.find_all("button") if "name" in b.attrs}
        assert "button_alt-active" in buttons["card"].classes
        assert "button_alt-active" not in buttons["cash"].classes

    def test_blur_touches_only_filled_fields(self, events):
        form = OrderFormView(events)
        form.set_address("Main st 1")

        form.blur("address")
        form.blur("payment")

        assert list(form.touched) == ["address"]

    def test_submit_error_is_always_shown(self, events):
        form = OrderFormView(events)

        form.set_submit_error("Service unavailable")

        assert form.error_text == "Service unavailable"

    def test_disabled_submit_swallows_attempt(self, events, published):
        form = OrderFormView(events)

        assert form.submit() is False
        assert published == []

    def test_submit_emits_current_values(self, events, published):
        form = OrderFormView(events)
        form.set_payment("card")
        form.set_address("Main st 1")
        form.set_submit_enabled(True)

        assert form.submit() is True
        assert published == [OrderStepSubmitted(payment="card", address="Main st 1")]

    def test_reset_touched_hides_errors_again(self, events):
        form = OrderFormView(events)
        form.input_address("")
        form.set_validation_errors({"address": "Enter a delivery address"})

        form.reset_touched()

        assert form.error_text == ""


class TestContactsForm:
    def test_input_emits_field_change(self, events, published):
        form = ContactsFormView(events)

        form.input("email", "buyer@example.com")

        assert form.email == "buyer@example.com"
        assert published == [ContactsFieldChanged(field="email", value="buyer@example.com")]

    def test_only_touched_errors_shown(self, events):
        form = ContactsFormView(events)
        form.input("email", "x")

        form.set_validation_errors({"email": "Enter a valid email", "phone": "Enter your phone number"})

        assert form.visible_errors == {"email": "Enter a valid email"}

    def test_errors_joined_with_submit_error(self, events):
        form = ContactsFormView(events)
        form.input("email", "x")
        form.set_validation_errors({"email": "Enter a valid email"})

        form.set_submit_error("Rejected")

        assert form.error_text == "Enter a valid email; Rejected"

    def test_submit(self, events, published):
        form = ContactsFormView(events)
        form.set_email("buyer@example.com")
        form.set_phone("89991234567")
        form.set_submit_enabled(True)

        form.submit()

        assert published == [ContactsStepSubmitted(email="buyer@example.com", phone="89991234567")]


class TestViewSet:
    def test_build_views_is_complete(self, events):
        views = build_views(events, currency="credits")

        views.ensure_complete()
        assert views.basket().currency == "credits"
        assert views.catalog_card().currency == "credits"

    def test_missing_collaborator(self, events):
        views = build_views(events)
        views.modal = None

        with pytest.raises(ConfigurationError, match="modal"):
            views.ensure_complete()
