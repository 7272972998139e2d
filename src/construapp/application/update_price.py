"""Application service: Update Price use case (admin only).

The new price is applied locally first and then merge-written to the
product document, touching only the ``price`` field. If the write fails
the local price is put back, so the local mirror never keeps a price
the store did not accept.
"""

from __future__ import annotations

import logging

from construapp.application.notifications import Notifier
from construapp.application.session import StorefrontSession
from construapp.domain.exceptions import StoreError, ValidationError
from construapp.domain.model.value_objects import Money
from construapp.domain.repository.product_store import ProductStore

logger = logging.getLogger(__name__)


class UpdatePriceHandler:

    def __init__(
        self,
        session: StorefrontSession,
        store: ProductStore | None,
        notifier: Notifier,
    ) -> None:
        self._session = session
        self._store = store
        self._notifier = notifier

    def handle(self, product_id: str, raw_value: str) -> bool:
        """Set a product price from raw user input.

        Raises AccessDeniedError outside admin mode, EntityNotFoundError
        for unknown products and ValidationError for input that is not a
        non-negative number. Returns False when the store write failed.
        """
        self._session.admin.require_admin()
        if self._store is None:
            raise ValidationError("The catalog is read-only while the store is offline.")

        product = self._session.find_product(product_id)
        try:
            new_price = Money.of(raw_value)
        except ValidationError as exc:
            self._notifier.error(str(exc))
            raise

        previous = product.price
        product.update_price(new_price)
        self._session.cart.reprice(self._session.products)

        try:
            self._store.merge_price(product.id, new_price)
        except StoreError:
            logger.exception("Failed to save price for product %s", product.id)
            product.price = previous
            self._session.cart.reprice(self._session.products)
            self._notifier.error("Could not save the price.")
            return False

        self._notifier.success(f"Price of product {product.id} updated.")
        return True
