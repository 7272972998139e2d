"""Application service: Return To Catalog.

The explicit user action that closes a completed checkout: the cart is
emptied only here, never right after the order is written.
"""

from __future__ import annotations

from construapp.application.session import StorefrontSession


class ReturnToCatalogHandler:

    def __init__(self, session: StorefrontSession) -> None:
        self._session = session

    def handle(self) -> None:
        checkout = self._session.checkout
        if not checkout.order_placed:
            return
        checkout.order_placed = False
        self._session.cart.clear()
