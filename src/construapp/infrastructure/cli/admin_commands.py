"""CLI commands for the admin price editor."""

from __future__ import annotations

import click

from construapp.application.admin_login import AdminLoginHandler
from construapp.application.update_price import UpdatePriceHandler
from construapp.domain.exceptions import DomainException
from construapp.infrastructure.cli.common import opened_storefront
from construapp.infrastructure.config import Settings


@click.command("set-price")
@click.option("--pin", required=True, prompt=True, hide_input=True, help="Admin PIN.")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--price", required=True, help="New price (e.g. 249.90).")
@click.pass_obj
def admin_set_price(settings: Settings, pin: str, product_id: str, price: str) -> None:
    """Update a product's price."""
    with opened_storefront(settings) as storefront:
        login = AdminLoginHandler(storefront.session, storefront.notifier)
        if not login.login(pin):
            raise click.ClickException("Incorrect PIN")

        handler = UpdatePriceHandler(
            storefront.session, storefront.product_store, storefront.notifier
        )
        try:
            saved = handler.handle(product_id, price)
        except DomainException as exc:
            raise click.ClickException(str(exc))
        if not saved:
            raise click.ClickException("Could not save the price.")

        new_price = storefront.session.find_product(product_id).display_price

    click.echo(f"Product #{product_id} price updated to {new_price}")
