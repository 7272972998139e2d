"""Storefront session state.

One session per running storefront: the local catalog mirror, the cart,
the checkout form and the admin gate. Handlers read and mutate it; only
CatalogSync replaces the product list.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field

from construapp.domain.exceptions import EntityNotFoundError
from construapp.domain.model.cart import Cart
from construapp.domain.model.product import Product
from construapp.domain.service.admin_gate import AdminGate


def _new_idempotency_key() -> str:
    return uuid.uuid4().hex


@dataclass
class CheckoutForm:
    """Delivery fields plus the state of the current checkout attempt.

    The idempotency key survives failed submissions so a retry of the same
    order carries the same key. It is rotated once an order is recorded,
    and when a retry carries different contents than the attempt before.
    """

    address: str = ""
    phone: str = ""
    order_placed: bool = False
    last_order_id: str | None = None
    idempotency_key: str = field(default_factory=_new_idempotency_key)
    attempted: tuple | None = None

    def key_for(self, contents: tuple) -> str:
        """Idempotency key for an attempt submitting *contents*."""
        if self.attempted is not None and self.attempted != contents:
            self.idempotency_key = _new_idempotency_key()
        self.attempted = contents
        return self.idempotency_key

    def mark_placed(self, order_id: str | None) -> None:
        self.order_placed = True
        self.last_order_id = order_id
        self.address = ""
        self.phone = ""
        self.idempotency_key = _new_idempotency_key()
        self.attempted = None


@dataclass
class StorefrontSession:

    user_id: str | None = None
    products: list[Product] = field(default_factory=list)
    cart: Cart = field(default_factory=Cart)
    checkout: CheckoutForm = field(default_factory=CheckoutForm)
    admin: AdminGate = field(default_factory=AdminGate)

    def find_product(self, product_id: str) -> Product:
        for product in self.products:
            if product.id == str(product_id):
                return product
        raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
