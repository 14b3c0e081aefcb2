"""Abstract repository for the Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from stockorders.domain.model.order import NewOrder, Order


class OrderRepository(ABC):

    @abstractmethod
    def create(self, new_order: NewOrder) -> Order:
        """Persist an order and all of its line items atomically.

        Returns the stored order with generated order and line-item ids.
        """

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""
