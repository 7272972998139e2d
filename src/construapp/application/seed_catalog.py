"""Application service: Bootstrap Seeder.

Ensures every fallback product exists in the remote store. Each product
is merge-written under its own id, so running the seeder again, or from
two sessions at once, only repeats identical writes.
"""

from __future__ import annotations

import logging

from construapp.application.notifications import Notifier
from construapp.domain.exceptions import StoreError
from construapp.domain.model.fallback_catalog import fallback_products
from construapp.domain.repository.product_store import ProductStore

logger = logging.getLogger(__name__)


class BootstrapSeeder:

    def __init__(self, store: ProductStore, notifier: Notifier | None = None) -> None:
        self._store = store
        self._notifier = notifier

    def seed(self) -> int:
        """Merge-write each fallback product. Returns the writes that succeeded."""
        written = 0
        for product in fallback_products():
            try:
                self._store.merge(product)
            except StoreError:
                logger.exception("Failed to seed product %s", product.id)
                if self._notifier is not None:
                    self._notifier.error("Could not initialize the catalog.")
                continue
            written += 1
        logger.info("Seeded %d fallback products", written)
        return written
