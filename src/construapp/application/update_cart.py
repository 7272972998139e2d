"""Application service: quantity controls and line removal."""

from __future__ import annotations

from construapp.application.session import StorefrontSession


class UpdateCartHandler:

    def __init__(self, session: StorefrontSession) -> None:
        self._session = session

    def remove(self, product_id: str) -> None:
        self._session.cart.remove(product_id)

    def change_quantity(self, product_id: str, delta: int) -> None:
        self._session.cart.change_quantity(product_id, delta)
