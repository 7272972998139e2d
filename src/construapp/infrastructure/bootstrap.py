"""Composition root: builds a storefront from Settings.

Stores, handlers and the session are wired here and nowhere else; the
CLI receives a ready Storefront and never touches pymongo directly.

When the store is not configured or cannot be reached at startup, the
storefront runs in fallback mode: the static catalog is shown read-only
and there is no sync, no order submission and no price editing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pymongo import MongoClient
from pymongo.errors import PyMongoError

from construapp.application.notifications import Notifier
from construapp.application.seed_catalog import BootstrapSeeder
from construapp.application.session import StorefrontSession
from construapp.application.sync_catalog import CatalogSync
from construapp.domain.exceptions import StoreError
from construapp.domain.model.cart import Cart
from construapp.domain.model.fallback_catalog import fallback_products
from construapp.domain.repository.order_repository import OrderRepository
from construapp.domain.repository.product_store import ProductStore
from construapp.infrastructure.config import Settings
from construapp.infrastructure.dispatcher import EventDispatcher
from construapp.infrastructure.identity import sign_in
from construapp.infrastructure.persistence.mongo_store import (
    MongoOrderRepository,
    MongoProductStore,
)

logger = logging.getLogger(__name__)


@dataclass
class Storefront:
    """Everything one running storefront needs, already wired."""

    settings: Settings
    session: StorefrontSession
    notifier: Notifier
    dispatcher: EventDispatcher
    product_store: ProductStore | None = None
    order_repo: OrderRepository | None = None
    sync: CatalogSync | None = None
    client: MongoClient | None = None

    @property
    def online(self) -> bool:
        return self.product_store is not None

    def seeder(self) -> BootstrapSeeder | None:
        if self.product_store is None:
            return None
        return BootstrapSeeder(self.product_store, self.notifier)

    def close(self) -> None:
        if self.sync is not None:
            self.sync.close()
        if self.client is not None:
            self.client.close()
            self.client = None


def connect(settings: Settings) -> MongoClient | None:
    """Open a client and check the server answers; None when it does not."""
    if not settings.database_url:
        logger.warning("No database_url configured; using the fallback catalog")
        return None

    client: MongoClient = MongoClient(
        settings.database_url,
        serverSelectionTimeoutMS=settings.connect_timeout_ms,
    )
    try:
        client.admin.command("ping")
    except PyMongoError as exc:
        logger.error("Store unreachable, using the fallback catalog: %s", exc)
        client.close()
        return None
    return client


def open_storefront(settings: Settings, live: bool = True) -> Storefront:
    """Build a storefront session.

    With ``live`` the catalog subscription is started; its snapshots are
    applied when the caller drains ``storefront.dispatcher``. Without it
    the catalog is read once, which suits one-shot commands.
    """
    identity = sign_in(settings)
    session = StorefrontSession(
        user_id=identity.user_id,
        cart=Cart(price_policy=settings.price_policy),
    )
    notifier = Notifier(ttl=settings.notification_ttl)
    dispatcher = EventDispatcher()
    storefront = Storefront(
        settings=settings,
        session=session,
        notifier=notifier,
        dispatcher=dispatcher,
    )

    client = connect(settings)
    if client is None:
        session.products = fallback_products()
        return storefront

    database = client[settings.database_name]
    product_store = MongoProductStore(
        database[settings.collection_name("products")], dispatcher
    )
    order_repo = MongoOrderRepository(database[settings.collection_name("orders")])

    try:
        order_repo.ensure_indexes()
        session.products = product_store.list_all() or fallback_products()
    except StoreError as exc:
        logger.error("Store failed during startup, using the fallback catalog: %s", exc)
        client.close()
        session.products = fallback_products()
        return storefront

    storefront.client = client
    storefront.product_store = product_store
    storefront.order_repo = order_repo
    storefront.sync = CatalogSync(
        product_store,
        session,
        BootstrapSeeder(product_store, notifier),
        notifier,
    )
    if live:
        storefront.sync.start()
    return storefront
