"""JSON-file-backed implementation of OrderRepository.

An order and its line items are one record in the file, so a single
file replace stores them together or not at all.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

from stockorders.domain.model.order import NewOrder, Order, OrderLineItem
from stockorders.domain.model.value_objects import Money, Quantity
from stockorders.domain.repository.order_repository import OrderRepository
from stockorders.infrastructure.persistence.json_file import JsonFile


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- OrderRepository interface --------------------------------------------

    def create(self, new_order: NewOrder) -> Order:
        now = datetime.now(timezone.utc)

        with self._file.update() as records:
            order_id = max((o["id"] for o in records), default=0) + 1
            next_item_id = max(
                (i["id"] for o in records for i in o["items"]), default=0
            ) + 1

            order = Order(
                id=order_id,
                customer_id=new_order.customer_id,
                items=[
                    OrderLineItem(
                        id=next_item_id + offset,
                        product_id=item.product_id,
                        unit_price=item.unit_price,
                        quantity=item.quantity,
                    )
                    for offset, item in enumerate(new_order.items)
                ],
                created_at=now,
                updated_at=now,
            )
            records.append(self._to_raw(order))

        return order

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._file.read():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "customer_id": order.customer_id,
            "created_at": order.created_at.isoformat(),
            "updated_at": order.updated_at.isoformat(),
            "items": [
                {
                    "id": item.id,
                    "product_id": item.product_id,
                    "quantity": item.quantity.value,
                    "unit_price": str(item.unit_price.amount),
                }
                for item in order.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        items = [
            OrderLineItem(
                id=i["id"],
                product_id=i["product_id"],
                quantity=Quantity(i["quantity"]),
                unit_price=Money(Decimal(i["unit_price"])),
            )
            for i in raw["items"]
        ]
        return Order(
            id=raw["id"],
            customer_id=raw["customer_id"],
            items=items,
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )
