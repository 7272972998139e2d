"""Order aggregate: written once at checkout, never mutated afterwards.

The Order owns itemized snapshots of the cart lines it was built from.
The creation timestamp is assigned by the store, not by the client, so
``created_at`` stays None until the order is read back.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from construapp.domain.exceptions import ValidationError
from construapp.domain.model.cart import CartLine
from construapp.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "Pending"


@dataclass(frozen=True)
class OrderLine:
    """Itemized snapshot of one cart line at submission time."""

    product_id: str
    name: str
    quantity: Quantity
    unit_price: Money
    unit: str

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value

    @staticmethod
    def from_cart_line(line: CartLine) -> OrderLine:
        return OrderLine(
            product_id=line.product_id,
            name=line.product.name,
            quantity=line.quantity,
            unit_price=line.unit_price,
            unit=line.product.unit,
        )


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use ``Order.create()`` for new orders; it enforces the checkout
    preconditions. The plain ``__init__`` lets repositories rebuild
    persisted orders without re-validating.
    """

    id: str | None
    customer_id: str | None
    address: str
    phone: str
    items: list[OrderLine]
    idempotency_key: str
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime | None = None

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        customer_id: str | None,
        address: str,
        phone: str,
        lines: list[CartLine],
        idempotency_key: str,
    ) -> Order:
        """Build a new order from cart lines, enforcing all invariants."""
        if not address or not address.strip():
            raise ValidationError("Please enter the delivery address and phone.")
        if not phone or not phone.strip():
            raise ValidationError("Please enter the delivery address and phone.")
        if not lines:
            raise ValidationError("Cart is empty")

        return Order(
            id=None,
            customer_id=customer_id,
            address=address,
            phone=phone,
            items=[OrderLine.from_cart_line(line) for line in lines],
            idempotency_key=idempotency_key,
        )

    # --- Computed properties --------------------------------------------------

    @property
    def total(self) -> Money:
        result = Money.zero()
        for item in self.items:
            result = result + item.line_total
        return result

    def contents(self) -> tuple:
        """What the customer is ordering: delivery fields plus line items."""
        return (
            self.address.strip(),
            self.phone.strip(),
            tuple(
                (item.product_id, item.quantity.value, item.unit_price.amount)
                for item in self.items
            ),
        )
