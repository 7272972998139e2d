"""CLI commands for the product catalog."""

from __future__ import annotations

import click

from construapp.application.show_catalog import ShowCatalogHandler
from construapp.domain.exceptions import DomainException
from construapp.infrastructure.cli.common import echo_catalog, echo_sheet, opened_storefront
from construapp.infrastructure.config import Settings


@click.command("list")
@click.option("--search", default="", help="Filter by name or category.")
@click.pass_obj
def catalog_list(settings: Settings, search: str) -> None:
    """List the products in the catalog."""
    with opened_storefront(settings) as storefront:
        products = ShowCatalogHandler(storefront.session).handle(search)
        online = storefront.online

    if not online:
        click.echo("Store offline: showing the fallback catalog (read-only).")
    if not products:
        click.echo("No products found.")
        return
    echo_catalog(products)


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.pass_obj
def catalog_show(settings: Settings, product_id: str) -> None:
    """Show the technical sheet of a product."""
    with opened_storefront(settings) as storefront:
        try:
            product = ShowCatalogHandler(storefront.session).detail(product_id)
        except DomainException as exc:
            raise click.ClickException(str(exc))

    echo_sheet(product)


@click.command("seed")
@click.pass_obj
def catalog_seed(settings: Settings) -> None:
    """Merge-write the fallback products into the store."""
    with opened_storefront(settings) as storefront:
        seeder = storefront.seeder()
        if seeder is None:
            raise click.ClickException("Store is not reachable; nothing was seeded.")
        written = seeder.seed()

    click.echo(f"Seeded {written} products.")
