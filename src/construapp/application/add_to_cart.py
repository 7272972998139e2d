"""Application service: Add To Cart use case."""

from __future__ import annotations

from construapp.application.notifications import Notifier
from construapp.application.session import StorefrontSession


class AddToCartHandler:

    def __init__(self, session: StorefrontSession, notifier: Notifier) -> None:
        self._session = session
        self._notifier = notifier

    def handle(self, product_id: str) -> int:
        """Add one unit of a catalog product; returns the new line quantity."""
        product = self._session.find_product(product_id)
        line = self._session.cart.add(product)
        self._notifier.success(f"{product.name} added to cart.")
        return line.quantity.value
