"""Application service: Place Order use case.

Validates the checkout form, snapshots the cart into an Order and writes
it once. The cart is left intact; it is only emptied when the user goes
back to the catalog (see ReturnToCatalogHandler).

Each checkout attempt carries the form's idempotency key. A retry of the
same order after a failed write reuses it, so if the first write reached the
store the second one is rejected as a duplicate instead of creating a
second order. A retry with a changed cart or delivery details is a new
order and gets a new key.
"""

from __future__ import annotations

import logging

from construapp.application.notifications import Notifier
from construapp.application.session import StorefrontSession
from construapp.domain.exceptions import DuplicateOrderError, StoreError, ValidationError
from construapp.domain.model.order import Order
from construapp.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class PlaceOrderHandler:

    def __init__(
        self,
        session: StorefrontSession,
        order_repo: OrderRepository | None,
        notifier: Notifier,
    ) -> None:
        self._session = session
        self._order_repo = order_repo
        self._notifier = notifier

    def handle(self) -> bool:
        """Submit the current cart. Returns True once the order is recorded.

        Validation failures are posted to the notifier and raised.
        Store failures are posted to the notifier and return False; the
        user may retry.
        """
        form = self._session.checkout

        try:
            order = Order.create(
                customer_id=self._session.user_id,
                address=form.address,
                phone=form.phone,
                lines=self._session.cart.lines,
                idempotency_key=form.idempotency_key,
            )
            if self._order_repo is None:
                raise ValidationError("The order service is unavailable.")
        except ValidationError as exc:
            self._notifier.error(str(exc))
            raise

        order.idempotency_key = form.key_for(order.contents())
        order.id = self._order_repo.next_id()

        try:
            self._order_repo.add(order)
        except DuplicateOrderError:
            logger.info("Order with key %s already recorded", order.idempotency_key)
            form.mark_placed(None)
            self._notifier.success("Order already received.")
            return True
        except StoreError:
            logger.exception("Failed to place order")
            self._notifier.error("Could not send the order, please try again.")
            return False

        form.mark_placed(order.id)
        self._notifier.success("Order placed successfully!")
        return True
