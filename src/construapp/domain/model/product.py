"""Product aggregate.

Products are created by the bootstrap seed or by an admin directly in
the store. In this system they are never deleted; the only mutation is a
price change.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from construapp.domain.model.value_objects import Money

UNAVAILABLE_PRICE = "N/A"


@dataclass
class Product:
    """A product in the catalog.

    ``price`` is None when the store document carries no price. Such a
    product is still listed, but shows as unavailable instead of free.
    ``specs`` keeps the technical sheet rows in display order.
    """

    id: str
    name: str
    price: Money | None
    unit: str = ""
    category: str = ""
    image: str = ""
    description: str = ""
    specs: tuple[tuple[str, str], ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Fallback data and some stores use numeric ids; the collection key
        # is always the string form.
        self.id = str(self.id)

    @property
    def display_price(self) -> str:
        if self.price is None:
            return UNAVAILABLE_PRICE
        return str(self.price)

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        Existing orders are unaffected; they captured a price snapshot.
        Cart lines follow the configured price policy.
        """
        self.price = new_price

    def matches(self, text: str) -> bool:
        """Case-insensitive substring match on name and category."""
        needle = text.strip().lower()
        if not needle:
            return True
        return needle in self.name.lower() or needle in self.category.lower()
