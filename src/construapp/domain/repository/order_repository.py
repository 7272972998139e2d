"""Abstract repository for the Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from construapp.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate a fresh, store-unique order ID."""

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def add(self, order: Order) -> None:
        """Persist a new order with a store-assigned timestamp.

        Raises DuplicateOrderError when an order with the same
        idempotency key already exists.
        """
