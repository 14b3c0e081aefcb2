"""JSON-file-backed implementation of CustomerRepository."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from stockorders.domain.model.customer import Customer
from stockorders.domain.repository.customer_repository import CustomerRepository
from stockorders.infrastructure.persistence.json_file import JsonFile


class JsonCustomerRepository(CustomerRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- CustomerRepository interface -----------------------------------------

    def find_by_id(self, customer_id: str) -> Customer | None:
        for raw in self._file.read():
            if raw["id"] == customer_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Customer]:
        return [self._to_domain(raw) for raw in self._file.read()]

    def save(self, customer: Customer) -> None:
        with self._file.update() as records:
            for i, raw in enumerate(records):
                if raw["id"] == customer.id:
                    records[i] = self._to_raw(customer)
                    break
            else:
                records.append(self._to_raw(customer))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(customer: Customer) -> dict:
        return {
            "id": customer.id,
            "name": customer.name,
            "email": customer.email,
            "created_at": customer.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Customer:
        return Customer(
            id=raw["id"],
            name=raw["name"],
            email=raw.get("email", ""),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
