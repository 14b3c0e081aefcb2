"""Order aggregate.

An Order owns its line items. Orders are created once, atomically with
their line items, and never updated or deleted afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from stockorders.domain.model.value_objects import Money, Quantity


@dataclass(frozen=True)
class NewOrderLineItem:
    """A line item that has not been persisted yet."""

    product_id: str
    unit_price: Money  # snapshot of the catalog price
    quantity: Quantity


@dataclass(frozen=True)
class NewOrder:
    """Everything the order store needs to create an order in one call."""

    customer_id: str
    items: list[NewOrderLineItem]


@dataclass(frozen=True)
class OrderLineItem:
    """Captures the price of a product at order-creation time.

    ``unit_price`` never changes after creation, even when the catalog
    price does (price lock).
    """

    id: int
    product_id: str
    unit_price: Money
    quantity: Quantity

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """A persisted order.

    Instances are produced by ``OrderRepository.create()`` (which assigns
    the order and line-item ids) or reconstituted from storage.
    """

    id: int
    customer_id: str
    items: list[OrderLineItem]
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def total(self) -> Money:
        result = Money.zero()
        for item in self.items:
            result = result + item.line_total
        return result

    def quantities_by_product(self) -> dict[str, int]:
        """Total ordered quantity per product id, in first-seen order."""
        totals: dict[str, int] = {}
        for item in self.items:
            totals[item.product_id] = totals.get(item.product_id, 0) + item.quantity.value
        return totals
