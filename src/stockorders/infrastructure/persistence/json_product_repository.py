"""JSON-file-backed implementation of ProductRepository.

``locked()`` holds ``<name>.stock.lock`` for the whole catalog, so any
threads or processes sharing this data directory place orders one at a
time. ``update_quantities()`` runs under the file lock as well, so its
expected-quantity check also rejects stale writes from callers that
skipped ``locked()``.
"""

from __future__ import annotations

from collections.abc import Iterable
from contextlib import AbstractContextManager
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from filelock import FileLock

from stockorders.domain.exceptions import ProductNotFoundError, StockConflictError
from stockorders.domain.model.product import CatalogProduct, StockUpdate
from stockorders.domain.model.value_objects import Money
from stockorders.domain.repository.product_repository import ProductRepository
from stockorders.infrastructure.persistence.json_file import JsonFile


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)
        self._stock_lock_path = file_path.with_name(file_path.name + ".stock.lock")

    # --- ProductRepository interface ------------------------------------------

    def find_all_by_id(self, product_ids: Iterable[str]) -> list[CatalogProduct]:
        wanted = set(product_ids)
        return [self._to_domain(raw) for raw in self._file.read() if raw["id"] in wanted]

    def update_quantities(self, updates: list[StockUpdate]) -> None:
        with self._file.update() as records:
            by_id = {raw["id"]: raw for raw in records}

            # Check the whole batch before touching any record
            for update in updates:
                raw = by_id.get(update.product_id)
                if raw is None:
                    raise ProductNotFoundError(update.product_id)
                if raw["quantity"] != update.expected_quantity:
                    raise StockConflictError(
                        update.product_id,
                        expected=update.expected_quantity,
                        actual=raw["quantity"],
                    )

            changed = []
            for update in updates:
                product = self._to_domain(by_id[update.product_id])
                product.set_quantity(update.quantity)
                changed.append(product)

            for product in changed:
                by_id[product.id].update(self._to_raw(product))

    def locked(self, product_ids: Iterable[str]) -> AbstractContextManager[None]:
        # One lock for the whole catalog
        return FileLock(self._stock_lock_path)

    def list_all(self) -> list[CatalogProduct]:
        return [self._to_domain(raw) for raw in self._file.read()]

    def save(self, product: CatalogProduct) -> None:
        with self._file.update() as records:
            for i, raw in enumerate(records):
                if raw["id"] == product.id:
                    records[i] = self._to_raw(product)
                    break
            else:
                records.append(self._to_raw(product))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: CatalogProduct) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "price": str(product.price.amount),
            "quantity": product.quantity,
            "created_at": product.created_at.isoformat(),
            "updated_at": product.updated_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> CatalogProduct:
        return CatalogProduct(
            id=raw["id"],
            name=raw["name"],
            price=Money(Decimal(raw["price"])),
            quantity=raw["quantity"],
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )
