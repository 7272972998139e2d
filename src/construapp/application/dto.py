"""Display-ready views of the catalog and cart.

Handlers return these instead of domain objects, with money already
formatted, so the CLI never imports the domain model.
"""

from __future__ import annotations

from dataclasses import dataclass

from construapp.domain.model.product import Product


@dataclass(frozen=True)
class ProductDTO:
    """Output: a catalog entry as displayed to the user."""

    id: str
    name: str
    category: str
    unit: str
    price: str  # formatted, or "N/A" when the product has no price
    description: str
    specs: tuple[tuple[str, str], ...]

    @staticmethod
    def from_product(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,
            name=product.name,
            category=product.category,
            unit=product.unit,
            price=product.display_price,
            description=product.description,
            specs=product.specs,
        )


@dataclass(frozen=True)
class CartLineDTO:
    product_id: str
    name: str
    unit: str
    quantity: int
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class CartDTO:
    """Output: the cart with its live total and badge count."""

    lines: list[CartLineDTO]
    total: str
    item_count: int
    order_placed: bool
