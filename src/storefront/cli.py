"""Storefront command-line interface.

Drives the application through the same view stubs a UI would use, so every
command exercises the full event flow.

Usage:
    storefront catalog
    storefront order --item ID [--item ID ...] --payment card \
        --email me@example.com --phone "+7 999 123-45-67" --address "Main st 1"
"""

import argparse
import asyncio
import sys

from identity.buyer.data import Payment
from ordering.checkout.flow import CheckoutStep
from storefront.app import Storefront, create_storefront
from storefront.config import get_settings
from storefront.utils.logging import add_context, clear_context, configure_logging
from storefront.views.base import format_price


async def show_catalog(storefront: Storefront) -> int:
    if not await storefront.start():
        print("Could not load the catalogue.", file=sys.stderr)
        return 1

    currency = get_settings().currency_label
    for product in storefront.catalog.get_items():
        print(f"{product.id}  {product.title} [{product.category}]  {format_price(product.price, currency)}")
    print(f"{len(storefront.catalog.get_items())} product(s).")
    return 0


async def place_order(storefront: Storefront, args: argparse.Namespace) -> int:
    if not await storefront.start():
        print("Could not load the catalogue.", file=sys.stderr)
        return 1

    views = storefront.views
    presenter = storefront.presenter

    for product_id in args.item:
        card = next(
            (c for c in views.catalog.container.find_all("card") if c.attrs.get("data-id") == product_id),
            None,
        )
        if card is None:
            print(f"Unknown product: {product_id}", file=sys.stderr)
            return 1
        card.dispatch("click")
        if presenter.preview.button_disabled:
            print(f"Product cannot be ordered: {product_id}", file=sys.stderr)
            return 1
        if not storefront.cart.contains(product_id):
            presenter.preview.click_button()

    views.header.click_basket()
    presenter.basket_view.click_checkout()

    order_form = views.order_form
    order_form.click_payment(args.payment)
    order_form.input_address(args.address)
    if not order_form.submit():
        print(f"Order details rejected: {order_form.error_text}", file=sys.stderr)
        return 1

    contacts_form = views.contacts_form
    contacts_form.input("email", args.email)
    contacts_form.input("phone", args.phone)
    if not contacts_form.submit():
        print(f"Contact details rejected: {contacts_form.error_text}", file=sys.stderr)
        return 1

    await presenter.wait_idle()

    if presenter.step != CheckoutStep.SUCCESS:
        print(f"Order failed: {contacts_form.error_text}", file=sys.stderr)
        return 1

    confirmation = presenter.checkout.last_confirmation
    print(f"Order {confirmation.id} placed.")
    print(views.modal.content.find("order-success__description").text)
    return 0


async def _run(args: argparse.Namespace) -> int:
    storefront = create_storefront(get_settings())
    try:
        if args.command == "catalog":
            return await show_catalog(storefront)
        return await place_order(storefront, args)
    finally:
        await storefront.service.aclose()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Storefront client")
    parser.add_argument("--log-level", default=None, help="Override the log level (default: by environment)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("catalog", help="List the products on sale")

    order_parser = subparsers.add_parser("order", help="Check out the given products")
    order_parser.add_argument("--item", action="append", required=True, help="Product id (repeatable)")
    order_parser.add_argument("--payment", choices=Payment.values(), required=True)
    order_parser.add_argument("--email", required=True)
    order_parser.add_argument("--phone", required=True)
    order_parser.add_argument("--address", required=True)

    args = parser.parse_args(argv)
    configure_logging(level=args.log_level)

    add_context(command=args.command)
    try:
        return asyncio.run(_run(args))
    finally:
        clear_context()


if __name__ == "__main__":
    sys.exit(main())
