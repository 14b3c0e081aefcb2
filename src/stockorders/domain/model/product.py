"""Catalog product.

Products live independently of orders. Order creation only reads their
price and quantity, and decrements the quantity once the order exists.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from stockorders.domain.exceptions import ValidationError
from stockorders.domain.model.value_objects import Money


@dataclass
class CatalogProduct:
    """A product in the catalog with its current stock level.

    Invariant: ``quantity`` is never negative.
    """

    id: str
    name: str
    price: Money
    quantity: int
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if self.quantity < 0:
            raise ValidationError(
                f"Stock for product '{self.id}' cannot be negative, got {self.quantity}"
            )

    def has_stock_for(self, quantity: int) -> bool:
        return quantity <= self.quantity

    def set_quantity(self, quantity: int) -> None:
        """Apply a new stock level and bump ``updated_at``."""
        if quantity < 0:
            raise ValidationError(
                f"Stock for product '{self.id}' cannot go negative "
                f"(attempted {quantity})"
            )
        self.quantity = quantity
        self.updated_at = datetime.now(timezone.utc)


@dataclass(frozen=True)
class StockUpdate:
    """A conditional stock change for one product.

    ``expected_quantity`` is the stock level the caller read before
    deciding on ``quantity``; the catalog refuses the update if the
    stored level no longer matches.
    """

    product_id: str
    quantity: int
    expected_quantity: int
