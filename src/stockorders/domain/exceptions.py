"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Storage failures (I/O, corrupt files) are not wrapped and propagate as-is.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class CustomerNotFoundError(EntityNotFoundError):
    """No customer exists with the given id."""

    def __init__(self, customer_id: str) -> None:
        super().__init__(f"Customer not found: '{customer_id}'")
        self.customer_id = customer_id


class ProductsNotFoundError(EntityNotFoundError):
    """None of the requested products exist in the catalog."""

    def __init__(self) -> None:
        super().__init__("Products not found")


class ProductNotFoundError(EntityNotFoundError):
    """A single requested product is missing from the catalog."""

    def __init__(self, product_id: str) -> None:
        super().__init__(f"Product not found: '{product_id}'")
        self.product_id = product_id


class OutOfStockError(ValidationError):
    """Requested quantity exceeds the quantity currently in stock."""

    def __init__(self, product_id: str, requested: int, available: int) -> None:
        super().__init__(
            f"Product '{product_id}' is out of stock "
            f"(need {requested}, have {available} available)"
        )
        self.product_id = product_id
        self.requested = requested
        self.available = available


class StockConflictError(DomainException):
    """Stock changed between the read and the conditional decrement."""

    def __init__(self, product_id: str, expected: int, actual: int) -> None:
        super().__init__(
            f"Stock for product '{product_id}' changed concurrently "
            f"(expected {expected}, found {actual})"
        )
        self.product_id = product_id
        self.expected = expected
        self.actual = actual
