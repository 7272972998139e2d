"""Abstract store for the Product collection.

Defined in the domain layer so the domain never depends on
infrastructure. The realtime subscription pushes the *whole* collection
on every change; listeners replace their state rather than patch it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from construapp.domain.model.product import Product
from construapp.domain.model.value_objects import Money

SnapshotListener = Callable[[list[Product]], None]
ErrorListener = Callable[[Exception], None]


class Subscription(ABC):

    @abstractmethod
    def unsubscribe(self) -> None:
        """Stop delivering snapshots. Calling it twice is harmless."""


class ProductStore(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product currently in the collection."""

    @abstractmethod
    def merge(self, product: Product) -> None:
        """Merge-write every field of *product* into its document.

        Creates the document when absent; otherwise overlays the fields
        and leaves any others untouched.
        """

    @abstractmethod
    def merge_price(self, product_id: str, price: Money) -> None:
        """Merge-write only the ``price`` field of one document."""

    @abstractmethod
    def subscribe(
        self,
        on_snapshot: SnapshotListener,
        on_error: ErrorListener,
    ) -> Subscription:
        """Start pushing full-collection snapshots to *on_snapshot*."""
