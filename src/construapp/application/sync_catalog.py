"""Application service: Catalog Sync.

Keeps ``session.products`` mirroring the remote product collection.
Every snapshot replaces the whole list. An empty snapshot means the
store was never seeded: the fallback list is shown right away, and the
seeder writes it to the store, where it comes back as a later snapshot.
"""

from __future__ import annotations

import logging

from construapp.application.notifications import Notifier
from construapp.application.seed_catalog import BootstrapSeeder
from construapp.application.session import StorefrontSession
from construapp.domain.model.fallback_catalog import fallback_products
from construapp.domain.model.product import Product
from construapp.domain.repository.product_store import ProductStore, Subscription

logger = logging.getLogger(__name__)


class CatalogSync:

    def __init__(
        self,
        store: ProductStore,
        session: StorefrontSession,
        seeder: BootstrapSeeder,
        notifier: Notifier,
    ) -> None:
        self._store = store
        self._session = session
        self._seeder = seeder
        self._notifier = notifier
        self._subscription: Subscription | None = None

    @property
    def is_active(self) -> bool:
        return self._subscription is not None

    def start(self) -> None:
        """Open the one live subscription; a second call is a no-op."""
        if self._subscription is not None:
            return
        self._subscription = self._store.subscribe(self._on_snapshot, self._on_error)

    def close(self) -> None:
        """Release the subscription exactly once."""
        if self._subscription is None:
            return
        subscription, self._subscription = self._subscription, None
        subscription.unsubscribe()

    # --- Store callbacks ------------------------------------------------------

    def _on_snapshot(self, products: list[Product]) -> None:
        if products:
            self._session.products = list(products)
        else:
            logger.info("Product collection is empty; showing fallback catalog")
            self._session.products = fallback_products()
            self._seeder.seed()

        self._session.cart.reprice(self._session.products)

    def _on_error(self, exc: Exception) -> None:
        # The last good list stays in place.
        logger.error("Catalog subscription failed: %s", exc)
        self._notifier.error("Error loading the catalog.")
