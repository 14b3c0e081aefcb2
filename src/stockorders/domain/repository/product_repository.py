"""Abstract repository for the product catalog.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, in-memory) live in the
infrastructure layer and in the test fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from contextlib import AbstractContextManager

from stockorders.domain.model.product import CatalogProduct, StockUpdate


class ProductRepository(ABC):

    @abstractmethod
    def find_all_by_id(self, product_ids: Iterable[str]) -> list[CatalogProduct]:
        """Return the products matching *product_ids*.

        Missing ids are simply absent from the result; this never raises
        for unknown ids.
        """

    @abstractmethod
    def update_quantities(self, updates: list[StockUpdate]) -> None:
        """Apply every stock update as one all-or-nothing batch.

        Raises StockConflictError if any product's stored quantity no
        longer equals ``expected_quantity``, and ValidationError if any
        new quantity is negative. Nothing is written in either case.
        """

    @abstractmethod
    def locked(self, product_ids: Iterable[str]) -> AbstractContextManager[None]:
        """Hold exclusive access to the given products for the block.

        Callers that read stock, act on it and then write it back must
        do all three inside one ``locked()`` block.
        """

    @abstractmethod
    def list_all(self) -> list[CatalogProduct]:
        """Return every product in the catalog."""

    @abstractmethod
    def save(self, product: CatalogProduct) -> None:
        """Persist a new or updated product."""
