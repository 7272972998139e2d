"""MongoDB-backed implementations of ProductStore and OrderRepository.

Documents are keyed by ``_id``: the product id for products, a fresh
ObjectId string for orders. The realtime subscription rides on a change
stream; every change triggers a full re-read of the collection so that
listeners always receive a complete snapshot.
"""

from __future__ import annotations

import logging
import threading
from typing import Any

from bson import ObjectId
from pydantic import ValidationError as SchemaError
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError, PyMongoError

from construapp.domain.exceptions import DuplicateOrderError, StoreError, ValidationError
from construapp.domain.model.order import Order
from construapp.domain.model.product import Product
from construapp.domain.model.value_objects import Money
from construapp.domain.repository.order_repository import OrderRepository
from construapp.domain.repository.product_store import (
    ErrorListener,
    ProductStore,
    SnapshotListener,
    Subscription,
)
from construapp.infrastructure.dispatcher import EventDispatcher
from construapp.infrastructure.persistence.documents import OrderDocument, ProductDocument

logger = logging.getLogger(__name__)

# How long one change-stream poll waits before re-checking for unsubscribe.
_POLL_MS = 500


class MongoProductStore(ProductStore):

    def __init__(self, collection: Collection, dispatcher: EventDispatcher) -> None:
        self._collection = collection
        self._dispatcher = dispatcher

    # --- ProductStore interface -----------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        try:
            raw = self._collection.find_one({"_id": str(product_id)})
        except PyMongoError as exc:
            raise StoreError(f"Could not read product {product_id}: {exc}") from exc
        if raw is None:
            return None
        return self._to_domain(raw)

    def list_all(self) -> list[Product]:
        try:
            raws = list(self._collection.find().sort("_id", 1))
        except PyMongoError as exc:
            raise StoreError(f"Could not read products: {exc}") from exc
        products = []
        for raw in raws:
            product = self._to_domain(raw)
            if product is not None:
                products.append(product)
        return products

    def merge(self, product: Product) -> None:
        fields = ProductDocument.from_domain(product).model_dump(exclude_none=True)
        self._update(product.id, fields)

    def merge_price(self, product_id: str, price: Money) -> None:
        self._update(str(product_id), {"price": price.to_float()})

    def subscribe(
        self,
        on_snapshot: SnapshotListener,
        on_error: ErrorListener,
    ) -> Subscription:
        subscription = MongoSubscription(self, self._dispatcher, on_snapshot, on_error)
        subscription.start()
        return subscription

    # --- Internal helpers -----------------------------------------------------

    def watch(self) -> Any:
        return self._collection.watch(max_await_time_ms=_POLL_MS)

    def _update(self, product_id: str, fields: dict[str, Any]) -> None:
        try:
            self._collection.update_one({"_id": product_id}, {"$set": fields}, upsert=True)
        except PyMongoError as exc:
            raise StoreError(f"Could not write product {product_id}: {exc}") from exc

    @staticmethod
    def _to_domain(raw: dict) -> Product | None:
        product_id = str(raw.get("_id"))
        try:
            return ProductDocument.model_validate(raw).to_domain(product_id)
        except (SchemaError, ValidationError) as exc:
            logger.warning("Skipping malformed product document %s: %s", product_id, exc)
            return None


class MongoSubscription(Subscription):
    """Change-stream watcher running on a daemon thread.

    Snapshots and errors are posted to the dispatcher, never called
    directly from the watcher thread. Nothing is delivered after
    ``unsubscribe()``.
    """

    def __init__(
        self,
        store: MongoProductStore,
        dispatcher: EventDispatcher,
        on_snapshot: SnapshotListener,
        on_error: ErrorListener,
    ) -> None:
        self._store = store
        self._dispatcher = dispatcher
        self._on_snapshot = on_snapshot
        self._on_error = on_error
        self._stopped = threading.Event()
        self._thread = threading.Thread(target=self._run, name="catalog-watch", daemon=True)

    def start(self) -> None:
        self._thread.start()

    def unsubscribe(self) -> None:
        if self._stopped.is_set():
            return
        self._stopped.set()
        if self._thread.is_alive() and self._thread is not threading.current_thread():
            self._thread.join(timeout=_POLL_MS / 1000 * 4)

    # --- Watcher thread -------------------------------------------------------

    def _run(self) -> None:
        try:
            # Open the stream before the initial read so no change is missed.
            with self._store.watch() as stream:
                self._publish()
                while not self._stopped.is_set() and stream.alive:
                    change = stream.try_next()
                    if change is not None:
                        self._publish()
            if not self._stopped.is_set():
                raise StoreError("Catalog change stream closed by the server")
        except Exception as exc:
            # Every watcher failure is reported on the owning thread.
            if self._stopped.is_set():
                return
            logger.error("Catalog watcher stopped: %s", exc)
            self._dispatcher.post(self._deliver_error, exc)

    def _publish(self) -> None:
        self._dispatcher.post(self._deliver_snapshot, self._store.list_all())

    # --- Owning thread --------------------------------------------------------

    def _deliver_snapshot(self, products: list[Product]) -> None:
        if not self._stopped.is_set():
            self._on_snapshot(products)

    def _deliver_error(self, exc: Exception) -> None:
        if not self._stopped.is_set():
            self._on_error(exc)


class MongoOrderRepository(OrderRepository):

    def __init__(self, collection: Collection) -> None:
        self._collection = collection

    def ensure_indexes(self) -> None:
        """Unique idempotency keys make duplicate submissions fail."""
        try:
            self._collection.create_index("idempotencyKey", unique=True)
        except PyMongoError as exc:
            raise StoreError(f"Could not prepare the orders collection: {exc}") from exc

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> str:
        return str(ObjectId())

    def get_by_id(self, order_id: str) -> Order | None:
        try:
            raw = self._collection.find_one({"_id": order_id})
        except PyMongoError as exc:
            raise StoreError(f"Could not read order {order_id}: {exc}") from exc
        if raw is None:
            return None
        return OrderDocument.model_validate(raw).to_domain(order_id)

    def add(self, order: Order) -> None:
        if order.id is None:
            order.id = self.next_id()

        # $currentDate stamps the order with the server clock.
        try:
            self._collection.update_one(
                {"_id": order.id},
                {
                    "$setOnInsert": OrderDocument.from_domain(order).to_write(),
                    "$currentDate": {"timestamp": True},
                },
                upsert=True,
            )
        except DuplicateKeyError as exc:
            raise DuplicateOrderError(
                f"Order with key {order.idempotency_key} already exists"
            ) from exc
        except PyMongoError as exc:
            raise StoreError(f"Could not write order {order.id}: {exc}") from exc
