"""Application service: Show Cart use case (query)."""

from __future__ import annotations

from construapp.application.dto import CartDTO, CartLineDTO
from construapp.application.session import StorefrontSession


class ShowCartHandler:

    def __init__(self, session: StorefrontSession) -> None:
        self._session = session

    def handle(self) -> CartDTO:
        cart = self._session.cart
        return CartDTO(
            lines=[
                CartLineDTO(
                    product_id=line.product_id,
                    name=line.product.name,
                    unit=line.product.unit,
                    quantity=line.quantity.value,
                    unit_price=str(line.unit_price),
                    line_total=str(line.line_total),
                )
                for line in cart.lines
            ],
            total=str(cart.total()),
            item_count=cart.item_count(),
            order_placed=self._session.checkout.order_placed,
        )
