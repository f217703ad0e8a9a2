"""Checkout form view stubs: order details (step 1) and contacts (step 2).

Each form keeps a ``TouchedFieldSet``: a field becomes touched when the user
types into it, or leaves it holding a non-blank value. The presenter hands
the form the full validation result; the form only displays messages for
touched fields, so pristine fields never show premature errors. A form-level
submission error, by contrast, is always shown.
"""

from collections.abc import Iterator, Mapping

from identity.buyer.data import Payment
from shared.events.bus import EventBus
from shared.events.ordering import (
    ContactsFieldChanged,
    ContactsStepSubmitted,
    OrderFieldChanged,
    OrderStepSubmitted,
    PaymentSelected,
)
from storefront.views.base import Element, render_fields

PAYMENT_LABELS = {
    Payment.CARD.value: "Online",
    Payment.CASH.value: "On delivery",
}


class TouchedFieldSet:
    """Names of the fields the user has interacted with."""

    def __init__(self) -> None:
        self._fields: set[str] = set()

    def __contains__(self, field: str) -> bool:
        return field in self._fields

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._fields))

    def __len__(self) -> int:
        return len(self._fields)

    def touch(self, field: str) -> None:
        self._fields.add(field)

    def touch_if_filled(self, field: str, value: str) -> None:
        if value.strip():
            self._fields.add(field)

    def reset(self) -> None:
        self._fields.clear()

    def filter(self, errors: Mapping[str, str]) -> dict[str, str]:
        """Keep only the errors that belong to touched fields."""
        return {field: message for field, message in errors.items() if field in self._fields}


class _FormControls:
    """Submit button, error line and touched state shared by both forms."""

    def __init__(self, submit_text: str) -> None:
        self.touched = TouchedFieldSet()
        self.errors: dict[str, str] = {}
        self.submit_error: str | None = None
        self.error_line = Element("form__errors")
        self.submit_button = Element("button", text=submit_text, disabled=True, attrs={"type": "submit"})

    @property
    def visible_errors(self) -> dict[str, str]:
        return self.touched.filter(self.errors)

    def set_errors(self, errors: Mapping[str, str] | None) -> None:
        self.errors = dict(errors or {})
        self.refresh()

    def set_submit_error(self, message: str | None) -> None:
        self.submit_error = message
        self.refresh()

    def reset_touched(self) -> None:
        self.touched.reset()
        self.refresh()

    def refresh(self) -> None:
        messages = list(self.visible_errors.values())
        if self.submit_error:
            messages.append(self.submit_error)
        self.error_line.text = "; ".join(messages)

    def can_submit(self) -> bool:
        return not self.submit_button.disabled


class OrderFormView:
    """Step 1: payment method buttons and delivery address."""

    def __init__(self, events: EventBus) -> None:
        self.events = events
        self._controls = _FormControls("Next")
        self._payment = ""
        self._payment_buttons = {
            value: Element("button", text=label, attrs={"name": value}, classes={"button_alt"})
            for value, label in PAYMENT_LABELS.items()
        }
        self._address = Element("input", attrs={"name": "address"})
        self.container = Element(
            "form",
            attrs={"name": "order"},
            children=[
                *self._payment_buttons.values(),
                self._address,
                self._controls.error_line,
                self._controls.submit_button,
            ],
        )
        for value, button in self._payment_buttons.items():
            button.add_listener("click", lambda value=value: self.select_payment(value))

    def render(self, **fields) -> Element:
        return render_fields(self, fields)

    # -------------------------------------------------------------------
    # Display state
    # -------------------------------------------------------------------
    @property
    def payment(self) -> str:
        return self._payment

    @property
    def address(self) -> str:
        return self._address.text

    @property
    def touched(self) -> TouchedFieldSet:
        return self._controls.touched

    @property
    def visible_errors(self) -> dict[str, str]:
        return self._controls.visible_errors

    @property
    def error_text(self) -> str:
        return self._controls.error_line.text

    @property
    def submit_enabled(self) -> bool:
        return self._controls.can_submit()

    # -------------------------------------------------------------------
    # Presenter-facing setters
    # -------------------------------------------------------------------
    def set_payment(self, value: str | None) -> None:
        """Highlight the button for ``value``; an empty value clears the choice."""
        self._payment = value or ""
        for name, button in self._payment_buttons.items():
            active = name == self._payment
            button.toggle_class("button_alt-active", active)
            button.toggle_class("button_alt", not active)

    def set_address(self, value: str | None) -> None:
        self._address.text = value or ""

    def set_validation_errors(self, errors: Mapping[str, str] | None) -> None:
        self._controls.set_errors(errors)

    def set_submit_enabled(self, enabled: bool) -> None:
        self._controls.submit_button.disabled = not enabled

    def set_submit_error(self, message: str | None) -> None:
        self._controls.set_submit_error(message)

    def reset_touched(self) -> None:
        self._controls.reset_touched()

    # -------------------------------------------------------------------
    # User interaction
    # -------------------------------------------------------------------
    def click_payment(self, value: str) -> None:
        self._payment_buttons[value].dispatch("click")

    def select_payment(self, value: str) -> None:
        self.set_payment(value)
        self._controls.touched.touch("payment")
        self.events.publish(PaymentSelected(payment=value))

    def input_address(self, value: str) -> None:
        self._address.text = value
        self._controls.touched.touch("address")
        self.events.publish(OrderFieldChanged(field="address", value=value))

    def blur(self, field: str) -> None:
        value = self._payment if field == "payment" else self._address.text
        self._controls.touched.touch_if_filled(field, value)
        self._controls.refresh()

    def submit(self) -> bool:
        """Submit the step; a disabled submit control swallows the attempt."""
        if not self._controls.can_submit():
            return False
        self.events.publish(OrderStepSubmitted(payment=self._payment, address=self._address.text))
        return True


class ContactsFormView:
    """Step 2: email and phone."""

    def __init__(self, events: EventBus) -> None:
        self.events = events
        self._controls = _FormControls("Pay")
        self._inputs = {
            "email": Element("input", attrs={"name": "email"}),
            "phone": Element("input", attrs={"name": "phone"}),
        }
        self.container = Element(
            "form",
            attrs={"name": "contacts"},
            children=[
                *self._inputs.values(),
                self._controls.error_line,
                self._controls.submit_button,
            ],
        )

    def render(self, **fields) -> Element:
        return render_fields(self, fields)

    @property
    def email(self) -> str:
        return self._inputs["email"].text

    @property
    def phone(self) -> str:
        return self._inputs["phone"].text

    @property
    def touched(self) -> TouchedFieldSet:
        return self._controls.touched

    @property
    def visible_errors(self) -> dict[str, str]:
        return self._controls.visible_errors

    @property
    def error_text(self) -> str:
        return self._controls.error_line.text

    @property
    def submit_enabled(self) -> bool:
        return self._controls.can_submit()

    def set_email(self, value: str | None) -> None:
        self._inputs["email"].text = value or ""

    def set_phone(self, value: str | None) -> None:
        self._inputs["phone"].text = value or ""

    def set_validation_errors(self, errors: Mapping[str, str] | None) -> None:
        self._controls.set_errors(errors)

    def set_submit_enabled(self, enabled: bool) -> None:
        self._controls.submit_button.disabled = not enabled

    def set_submit_error(self, message: str | None) -> None:
        self._controls.set_submit_error(message)

    def reset_touched(self) -> None:
        self._controls.reset_touched()

    def input(self, field: str, value: str) -> None:
        self._inputs[field].text = value
        self._controls.touched.touch(field)
        self.events.publish(ContactsFieldChanged(field=field, value=value))

    def blur(self, field: str) -> None:
        self._controls.touched.touch_if_filled(field, self._inputs[field].text)
        self._controls.refresh()

    def submit(self) -> bool:
        if not self._controls.can_submit():
            return False
        self.events.publish(ContactsStepSubmitted(email=self.email, phone=self.phone))
        return True
