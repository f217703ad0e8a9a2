"""Checkout flow: the two-step checkout state machine.

Flow:
    1. BROWSING  → basket:checkout (non-empty cart)      → ORDER
    2. ORDER     → order:submit (payment + address valid) → CONTACTS
    3. CONTACTS  → contacts:submit (all four fields valid) → order sent
       3a. service accepts  → cart and buyer cleared     → SUCCESS
       3b. service rejects  → data kept, error shown      → CONTACTS
    4. SUCCESS   → success:close                          → BROWSING

Any modal dismissal returns to BROWSING. Field events write straight into
the buyer store and re-validate only the active step's fields, so an error
in one step never blocks the other. Forms receive the full error mapping and
decide for themselves what to show.
"""

import asyncio
from enum import Enum

import structlog

from identity.buyer.data import CONTACTS_STEP_FIELDS, ORDER_STEP_FIELDS, Payment
from identity.buyer.store import BuyerStore
from ordering.cart.store import CartStore
from ordering.order.order import IncompleteOrderError, Order, OrderConfirmation
from shared.events.bus import EventBus
from shared.events.identity import BUYER_CHANGED
from shared.events.ordering import (
    BASKET_CHECKOUT,
    BASKET_OPEN,
    CONTACTS_FIELD_CHANGED,
    CONTACTS_SUBMIT,
    MODAL_CLOSED,
    ORDER_FIELD_CHANGED,
    ORDER_SUBMIT,
    PAYMENT_SELECTED,
    SUCCESS_CLOSE,
    OrderFailed,
    OrderPlaced,
)
from shared.events.vocabulary import coerce
from shared.exceptions import ApiError
from storefront.api.port import ShopServicePort
from storefront.views import ViewSet

logger = structlog.get_logger(__name__)

EMPTY_CART_MESSAGE = "Your basket is empty"
ORDER_FAILED_MESSAGE = "Could not place the order, please try again"


class CheckoutStep(Enum):
    BROWSING = "Browsing"
    ORDER = "Order"
    CONTACTS = "Contacts"
    SUCCESS = "Success"


class CheckoutFlow:
    def __init__(
        self,
        events: EventBus,
        cart: CartStore,
        buyer: BuyerStore,
        service: ShopServicePort,
        views: ViewSet,
    ) -> None:
        self.events = events
        self.cart = cart
        self.buyer = buyer
        self.service = service
        self.views = views
        self.step = CheckoutStep.BROWSING
        self.last_confirmation: OrderConfirmation | None = None
        self._submission: asyncio.Task | None = None

        events.on(BASKET_OPEN, self._on_basket_open)
        events.on(BASKET_CHECKOUT, self._on_checkout)
        events.on(PAYMENT_SELECTED, self._on_payment_selected)
        events.on(ORDER_FIELD_CHANGED, self._on_order_field_changed)
        events.on(CONTACTS_FIELD_CHANGED, self._on_contacts_field_changed)
        events.on(ORDER_SUBMIT, self._on_order_submit)
        events.on(CONTACTS_SUBMIT, self._on_contacts_submit)
        events.on(SUCCESS_CLOSE, self._on_success_close)
        events.on(MODAL_CLOSED, self._on_modal_closed)
        events.on(BUYER_CHANGED, self._on_buyer_changed)

    @property
    def is_submitting(self) -> bool:
        return self._submission is not None and not self._submission.done()

    async def wait_idle(self) -> None:
        """Wait for an in-flight order submission, if any, to settle."""
        if self._submission is not None:
            await asyncio.gather(self._submission, return_exceptions=True)

    # -------------------------------------------------------------------
    # Step 1: payment and address
    # -------------------------------------------------------------------
    def open_order_step(self) -> None:
        if self.cart.is_empty():
            logger.warning("checkout_ignored_empty_cart")
            return

        form = self.views.order_form
        data = self.buyer.get_data()
        form.set_address(data.address)
        form.set_payment(data.payment if data.payment in Payment.values() else "")
        form.reset_touched()
        form.set_validation_errors({})
        form.set_submit_error(None)
        self.update_order_validation()

        self.views.modal.set_content(form.container)
        self.views.modal.open()
        self._transition(CheckoutStep.ORDER)

    def update_order_validation(self) -> None:
        form = self.views.order_form
        errors = self.buyer.validate(ORDER_STEP_FIELDS)
        if errors:
            form.set_validation_errors(errors)
            form.set_submit_enabled(False)
        else:
            form.set_validation_errors({})
            form.set_submit_enabled(self.buyer.is_order_step_complete())

    def _on_payment_selected(self, payload) -> None:
        event = coerce(PAYMENT_SELECTED, payload)
        self.buyer.set_data({"payment": event.payment})
        self.views.order_form.set_payment(event.payment)
        self.update_order_validation()

    def _on_order_field_changed(self, payload) -> None:
        event = coerce(ORDER_FIELD_CHANGED, payload)
        if event.field not in ORDER_STEP_FIELDS:
            logger.warning("unknown_order_field", field=event.field)
            return
        self.buyer.set_data({event.field: event.value})
        self.update_order_validation()

    def _on_order_submit(self, payload) -> None:
        event = coerce(ORDER_SUBMIT, payload)
        self.buyer.set_data({"payment": event.payment, "address": event.address})

        errors = self.buyer.validate(ORDER_STEP_FIELDS)
        if errors:
            logger.warning("order_step_invalid", errors=errors)
            self.update_order_validation()
            return

        self.open_contacts_step()

    # -------------------------------------------------------------------
    # Step 2: contacts and submission
    # -------------------------------------------------------------------
    def open_contacts_step(self) -> None:
        form = self.views.contacts_form
        data = self.buyer.get_data()
        form.set_email(data.email)
        form.set_phone(data.phone)
        form.reset_touched()
        form.set_validation_errors({})
        form.set_submit_error(None)
        self.update_contacts_validation()

        self.views.modal.set_content(form.container)
        self.views.modal.open()
        self._transition(CheckoutStep.CONTACTS)

    def update_contacts_validation(self) -> None:
        form = self.views.contacts_form
        errors = self.buyer.validate(CONTACTS_STEP_FIELDS)
        if errors:
            form.set_validation_errors(errors)
            form.set_submit_enabled(False)
        else:
            form.set_validation_errors({})
            form.set_submit_enabled(self.buyer.is_contacts_step_complete() and not self.is_submitting)

    def _on_contacts_field_changed(self, payload) -> None:
        event = coerce(CONTACTS_FIELD_CHANGED, payload)
        if event.field not in CONTACTS_STEP_FIELDS:
            logger.warning("unknown_contacts_field", field=event.field)
            return
        self.buyer.set_data({event.field: event.value})
        self.update_contacts_validation()

    def _on_contacts_submit(self, payload) -> None:
        event = coerce(CONTACTS_SUBMIT, payload)
        if self.is_submitting:
            logger.info("order_submission_in_flight")
            return

        self.buyer.set_data({"email": event.email, "phone": event.phone})

        errors = self.buyer.validate()
        if errors:
            logger.warning("contacts_step_invalid", errors=errors)
            self.update_contacts_validation()
            return

        try:
            order = Order.build(self.buyer.get_data(), self.cart.get_items(), self.cart.get_total())
        except IncompleteOrderError as exc:
            logger.warning("order_incomplete", error=str(exc))
            self.views.contacts_form.set_submit_error(EMPTY_CART_MESSAGE)
            return

        self.views.contacts_form.set_submit_enabled(False)
        self._submission = asyncio.get_running_loop().create_task(self.submit_order(order))

    async def submit_order(self, order: Order) -> OrderConfirmation | None:
        """Send ``order`` and apply the outcome.

        The contacts submit control stays disabled while the request is in
        flight. On failure the cart and buyer data are left untouched and the
        form is released for a retry; an unexpected exception is surfaced the
        same way and then re-raised.
        """
        form = self.views.contacts_form
        form.set_submit_enabled(False)
        form.set_submit_error(None)
        logger.info("order_submitting", items=len(order.items), total=order.total)

        try:
            confirmation = await self.service.create_order(order)
        except ApiError as exc:
            logger.error("order_submission_failed", error=str(exc), status_code=exc.status_code)
            self._fail_submission(exc.message)
            return None
        except Exception:
            logger.exception("order_submission_crashed")
            self._fail_submission(ORDER_FAILED_MESSAGE)
            raise
        finally:
            self._submission = None

        self.last_confirmation = confirmation
        self.cart.clear()
        self.buyer.clear()
        self.views.order_form.reset_touched()
        self.views.contacts_form.reset_touched()
        self._show_success(confirmation)
        self.events.publish(OrderPlaced(order_id=confirmation.id, total=confirmation.total))
        return confirmation

    def _fail_submission(self, message: str) -> None:
        # Still inside the submission task, so drop it before re-enabling
        self._submission = None
        self.update_contacts_validation()
        self.views.contacts_form.set_submit_error(message)
        self.events.publish(OrderFailed(message=message))

    # -------------------------------------------------------------------
    # Success and exits
    # -------------------------------------------------------------------
    def _show_success(self, confirmation: OrderConfirmation) -> None:
        success = self.views.success()
        success.render(total=confirmation.total)
        self.views.modal.set_content(success.container)
        self.views.modal.open()
        self._transition(CheckoutStep.SUCCESS)

    def _on_checkout(self, payload=None) -> None:
        self.open_order_step()

    def _on_basket_open(self, payload=None) -> None:
        self._transition(CheckoutStep.BROWSING)

    def _on_success_close(self, payload=None) -> None:
        self.views.modal.close()
        self._transition(CheckoutStep.BROWSING)

    def _on_modal_closed(self, payload=None) -> None:
        self._transition(CheckoutStep.BROWSING)

    def _on_buyer_changed(self, payload) -> None:
        event = coerce(BUYER_CHANGED, payload)
        if event.data.is_empty():
            self.views.order_form.reset_touched()
            self.views.contacts_form.reset_touched()

    def _transition(self, step: CheckoutStep) -> None:
        if step != self.step:
            logger.debug("checkout_step_changed", previous=self.step.value, current=step.value)
        self.step = step
