"""Interactive storefront session.

Keeps one Storefront open so the cart, checkout form and admin mode live
across commands, the way they do in a browser tab. Store pushes queued
on the dispatcher are applied before every prompt.
"""

from __future__ import annotations

import shlex
from typing import Callable

import click

from construapp.application.add_to_cart import AddToCartHandler
from construapp.application.admin_login import AdminLoginHandler
from construapp.application.notifications import Notification, NotificationKind
from construapp.application.place_order import PlaceOrderHandler
from construapp.application.return_to_catalog import ReturnToCatalogHandler
from construapp.application.show_cart import ShowCartHandler
from construapp.application.show_catalog import ShowCatalogHandler
from construapp.application.update_cart import UpdateCartHandler
from construapp.application.update_price import UpdatePriceHandler
from construapp.domain.exceptions import DomainException
from construapp.infrastructure.bootstrap import Storefront
from construapp.infrastructure.cli.common import echo_catalog, echo_sheet

HELP = """\
Commands:
  list [TEXT]        list the catalog, optionally filtered
  show ID            technical sheet of a product
  add ID             add one unit to the cart
  remove ID          remove a product from the cart
  qty ID DELTA       change a cart quantity (never below 1)
  cart               show the cart and its total
  checkout           enter delivery details and place the order
  back               return to the catalog after an order
  login PIN          enter admin mode
  logout             leave admin mode
  price ID VALUE     set a product price (admin)
  whoami             show the session id
  quit               leave the shell"""


class StorefrontShell:

    def __init__(
        self,
        storefront: Storefront,
        prompt: Callable[[str], str] | None = None,
    ) -> None:
        self._storefront = storefront
        self._prompt = prompt or _click_prompt
        self._last_shown: Notification | None = None

        session, notifier = storefront.session, storefront.notifier
        self._catalog = ShowCatalogHandler(session)
        self._add = AddToCartHandler(session, notifier)
        self._update = UpdateCartHandler(session)
        self._show_cart = ShowCartHandler(session)
        self._place_order = PlaceOrderHandler(session, storefront.order_repo, notifier)
        self._return = ReturnToCatalogHandler(session)
        self._admin = AdminLoginHandler(session, notifier)
        self._price = UpdatePriceHandler(session, storefront.product_store, notifier)

        self._commands: dict[str, Callable[[list[str]], None]] = {
            "list": self._cmd_list,
            "show": self._cmd_show,
            "add": self._cmd_add,
            "remove": self._cmd_remove,
            "qty": self._cmd_qty,
            "cart": self._cmd_cart,
            "checkout": self._cmd_checkout,
            "back": self._cmd_back,
            "login": self._cmd_login,
            "logout": self._cmd_logout,
            "price": self._cmd_price,
            "whoami": self._cmd_whoami,
            "help": self._cmd_help,
        }

    # --- Loop -----------------------------------------------------------------

    def run(self) -> None:
        if not self._storefront.online:
            click.echo("Store offline: fallback catalog, read-only.")
        click.echo("Type 'help' for commands.")
        while True:
            self.refresh()
            try:
                line = self._prompt(self._label())
            except (click.Abort, EOFError):
                click.echo()
                return
            if not self.execute(line):
                return

    def refresh(self) -> None:
        """Apply queued store events and show a new notification, if any."""
        self._storefront.dispatcher.run_pending()
        notification = self._storefront.notifier.current()
        if notification is not None and notification is not self._last_shown:
            marker = "OK" if notification.kind is NotificationKind.SUCCESS else "!!"
            click.echo(f"[{marker}] {notification.message}")
            self._last_shown = notification

    def execute(self, line: str) -> bool:
        """Run one command line. Returns False when the shell should exit."""
        try:
            words = shlex.split(line)
        except ValueError as exc:
            click.echo(f"Could not parse command: {exc}")
            return True
        if not words:
            return True

        name, args = words[0].lower(), words[1:]
        if name in ("quit", "exit"):
            return False

        command = self._commands.get(name)
        if command is None:
            click.echo(f"Unknown command '{name}'. Type 'help'.")
            return True

        try:
            command(args)
        except DomainException as exc:
            current = self._storefront.notifier.current()
            if current is None or current.message != str(exc):
                self._storefront.notifier.error(str(exc))
        except _UsageError as exc:
            click.echo(str(exc))
        return True

    def _label(self) -> str:
        count = self._storefront.session.cart.item_count()
        mode = "admin" if self._storefront.session.admin.is_admin else "shop"
        return f"{mode} [cart {count}]"

    # --- Commands -------------------------------------------------------------

    def _cmd_list(self, args: list[str]) -> None:
        products = self._catalog.handle(" ".join(args))
        if not products:
            click.echo("No products found.")
            return
        echo_catalog(products)

    def _cmd_show(self, args: list[str]) -> None:
        (product_id,) = _expect(args, "show ID")
        echo_sheet(self._catalog.detail(product_id))

    def _cmd_add(self, args: list[str]) -> None:
        (product_id,) = _expect(args, "add ID")
        self._add.handle(product_id)

    def _cmd_remove(self, args: list[str]) -> None:
        (product_id,) = _expect(args, "remove ID")
        self._update.remove(product_id)

    def _cmd_qty(self, args: list[str]) -> None:
        product_id, raw_delta = _expect(args, "qty ID DELTA")
        try:
            delta = int(raw_delta)
        except ValueError:
            raise _UsageError(f"DELTA must be an integer, got '{raw_delta}'")
        self._update.change_quantity(product_id, delta)

    def _cmd_cart(self, args: list[str]) -> None:
        cart = self._show_cart.handle()
        if cart.order_placed:
            click.echo("Order received! Type 'back' to return to the catalog.")
        if not cart.lines:
            click.echo("Your cart is empty.")
            return
        click.echo(f"  {'Product':<28} {'Qty':>5} {'Price':>10} {'Total':>10}")
        click.echo(f"  {'-'*56}")
        for line in cart.lines:
            click.echo(
                f"  {line.name:<28} {line.quantity:>5} {line.unit_price:>10} {line.line_total:>10}"
            )
        click.echo(f"  {'-'*56}")
        click.echo(f"  {'Total (' + str(cart.item_count) + ' items)':<34} {cart.total:>22}")

    def _cmd_checkout(self, args: list[str]) -> None:
        form = self._storefront.session.checkout
        try:
            address = self._prompt("Delivery address")
            phone = self._prompt("Contact phone")
        except (click.Abort, EOFError):
            click.echo()
            click.echo("Checkout cancelled.")
            return
        form.address, form.phone = address, phone
        if self._place_order.handle():
            click.echo("Order received! Type 'back' to return to the catalog.")

    def _cmd_back(self, args: list[str]) -> None:
        self._return.handle()

    def _cmd_login(self, args: list[str]) -> None:
        (pin,) = _expect(args, "login PIN")
        self._admin.login(pin)

    def _cmd_logout(self, args: list[str]) -> None:
        self._admin.logout()
        click.echo("Admin mode closed.")

    def _cmd_price(self, args: list[str]) -> None:
        product_id, value = _expect(args, "price ID VALUE")
        self._price.handle(product_id, value)

    def _cmd_whoami(self, args: list[str]) -> None:
        click.echo(f"User ID: {self._storefront.session.user_id or 'loading...'}")

    def _cmd_help(self, args: list[str]) -> None:
        click.echo(HELP)


class _UsageError(Exception):
    """Wrong arguments for a shell command."""


def _expect(args: list[str], usage: str) -> list[str]:
    wanted = len(usage.split()) - 1
    if len(args) != wanted:
        raise _UsageError(f"Usage: {usage}")
    return args


def _click_prompt(label: str) -> str:
    return click.prompt(label, default="", show_default=False)
