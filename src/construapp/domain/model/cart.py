"""Cart aggregate: local, single-writer state until checkout.

The cart owns at most one line per product id. Quantities are floored at
one; removing the line is the only way a product leaves the cart.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum

from construapp.domain.exceptions import ValidationError
from construapp.domain.model.product import Product
from construapp.domain.model.value_objects import Money, Quantity


class PricePolicy(Enum):
    """How cart lines react to a catalog price change.

    SNAPSHOT keeps the price seen when the product was added.
    LIVE follows the current catalog price via ``Cart.reprice``.
    """

    SNAPSHOT = "snapshot"
    LIVE = "live"


@dataclass
class CartLine:
    """A product snapshot plus a quantity."""

    product: Product
    quantity: Quantity
    unit_price: Money

    @property
    def product_id(self) -> str:
        return self.product.id

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Cart:

    price_policy: PricePolicy = PricePolicy.SNAPSHOT
    lines: list[CartLine] = field(default_factory=list)

    # --- Mutations ------------------------------------------------------------

    def add(self, product: Product) -> CartLine:
        """Add one unit of *product*, creating the line on first add."""
        line = self._find_line(product.id)
        if line is not None:
            line.quantity = line.quantity.adjusted(1)
            return line

        if product.price is None:
            raise ValidationError(
                f"{product.name} has no price and cannot be added to the cart"
            )
        snapshot = dataclasses.replace(product)
        line = CartLine(product=snapshot, quantity=Quantity(1), unit_price=product.price)
        self.lines.append(line)
        return line

    def remove(self, product_id: str) -> None:
        """Drop the line for *product_id*; unknown ids are ignored."""
        self.lines = [line for line in self.lines if line.product_id != str(product_id)]

    def change_quantity(self, product_id: str, delta: int) -> None:
        """Shift a line's quantity by *delta*, never below one."""
        line = self._find_line(str(product_id))
        if line is None:
            return
        line.quantity = line.quantity.adjusted(delta)

    def clear(self) -> None:
        self.lines = []

    def reprice(self, products: list[Product]) -> int:
        """Apply current catalog prices to lines under the LIVE policy.

        Returns the number of lines whose price changed. Lines for
        products missing from *products*, or now without a price, keep
        their last known price.
        """
        if self.price_policy is not PricePolicy.LIVE:
            return 0

        by_id = {p.id: p for p in products}
        changed = 0
        for line in self.lines:
            current = by_id.get(line.product_id)
            if current is None or current.price is None:
                continue
            if current.price != line.unit_price:
                line.unit_price = current.price
                line.product = dataclasses.replace(current)
                changed += 1
        return changed

    # --- Computed properties --------------------------------------------------

    def total(self) -> Money:
        result = Money.zero()
        for line in self.lines:
            result = result + line.line_total
        return result

    def item_count(self) -> int:
        return sum(line.quantity.value for line in self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def get(self, product_id: str) -> CartLine | None:
        return self._find_line(str(product_id))

    # --- Internal helpers -----------------------------------------------------

    def _find_line(self, product_id: str) -> CartLine | None:
        for line in self.lines:
            if line.product_id == product_id:
                return line
        return None
