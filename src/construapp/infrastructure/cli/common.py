"""Helpers shared by the CLI commands."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

import click

from construapp.application.dto import ProductDTO
from construapp.infrastructure.bootstrap import Storefront, open_storefront
from construapp.infrastructure.config import Settings


@contextmanager
def opened_storefront(settings: Settings, live: bool = False) -> Iterator[Storefront]:
    storefront = open_storefront(settings, live=live)
    try:
        yield storefront
    finally:
        storefront.close()


def echo_catalog(products: list[ProductDTO]) -> None:
    click.echo(f"{'ID':<6} {'Name':<28} {'Category':<14} {'Unit':<12} {'Price':>10}")
    click.echo("-" * 74)
    for p in products:
        click.echo(f"{p.id:<6} {p.name:<28} {p.category:<14} {p.unit:<12} {p.price:>10}")


def echo_sheet(product: ProductDTO) -> None:
    """Technical sheet: description plus spec rows."""
    click.echo(f"{product.name}  ({product.category} • {product.unit})")
    click.echo(f"Price: {product.price}")
    click.echo()
    click.echo(product.description or "No description.")
    if product.specs:
        click.echo()
        width = max(len(key) for key, _ in product.specs)
        for key, value in product.specs:
            click.echo(f"  {key:<{width}}  {value}")
