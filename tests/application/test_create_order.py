"""Integration tests for the CreateOrder use case.

Uses in-memory fake repositories, no file I/O.
"""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

import pytest
from structlog.testing import capture_logs

from stockorders.application.create_order import CreateOrderHandler
from stockorders.application.dto import OrderItemSpec
from stockorders.domain.exceptions import (
    CustomerNotFoundError,
    EntityNotFoundError,
    OutOfStockError,
    ProductNotFoundError,
    ProductsNotFoundError,
    ValidationError,
)
from stockorders.domain.model.customer import Customer
from stockorders.domain.model.product import CatalogProduct
from stockorders.domain.model.value_objects import Money
from tests.fakes import (
    FailingOrderRepository,
    FailingUpdateProductRepository,
    FakeCustomerRepository,
    FakeOrderRepository,
    FakeProductRepository,
)


def _products() -> list[CatalogProduct]:
    return [
        CatalogProduct(id="P", name="Widget", price=Money.of("10.00"), quantity=5),
        CatalogProduct(id="Q", name="Gadget", price=Money.of("25.00"), quantity=20),
        CatalogProduct(id="R", name="Gizmo", price=Money.of("7.50"), quantity=0),
    ]


def _setup(
    order_repo: FakeOrderRepository | None = None,
    product_repo_cls: type[FakeProductRepository] = FakeProductRepository,
) -> tuple[CreateOrderHandler, FakeOrderRepository, FakeProductRepository, FakeCustomerRepository]:
    """Build handler with fake repos, pre-loaded with customer C and products."""
    order_repo = order_repo or FakeOrderRepository()
    product_repo = product_repo_cls(_products())
    customer_repo = FakeCustomerRepository([Customer(id="C", name="Alice")])
    handler = CreateOrderHandler(order_repo, product_repo, customer_repo)
    return handler, order_repo, product_repo, customer_repo


class TestCreateOrderHappyPath:

    def test_single_item_order_decrements_stock(self):
        handler, _, product_repo, _ = _setup()

        order = handler.handle("C", [OrderItemSpec("P", 3)])

        assert order.customer_id == "C"
        assert len(order.items) == 1
        item = order.items[0]
        assert item.product_id == "P"
        assert item.unit_price == Money(Decimal("10.00"))
        assert item.quantity.value == 3
        assert product_repo.quantity_of("P") == 2

    def test_line_items_follow_request_order(self):
        handler, _, _, _ = _setup()
        order = handler.handle("C", [OrderItemSpec("Q", 2), OrderItemSpec("P", 1)])
        assert [(i.product_id, i.quantity.value) for i in order.items] == [("Q", 2), ("P", 1)]
        assert str(order.total) == "$60.00"

    def test_line_items_get_generated_ids(self):
        handler, _, _, _ = _setup()
        order = handler.handle("C", [OrderItemSpec("P", 1), OrderItemSpec("Q", 1)])
        assert [item.id for item in order.items] == [1, 2]

    def test_persists_order(self):
        handler, order_repo, _, _ = _setup()
        order = handler.handle("C", [OrderItemSpec("P", 1)])
        saved = order_repo.get_by_id(order.id)
        assert saved is not None
        assert saved.customer_id == "C"

    def test_stock_updated_in_one_batch(self):
        handler, _, product_repo, _ = _setup()
        handler.handle("C", [OrderItemSpec("P", 2), OrderItemSpec("Q", 4)])

        assert len(product_repo.update_calls) == 1
        batch = product_repo.update_calls[0]
        assert {(u.product_id, u.expected_quantity, u.quantity) for u in batch} == {
            ("P", 5, 3),
            ("Q", 20, 16),
        }

    def test_whole_stock_can_be_ordered(self):
        handler, _, product_repo, _ = _setup()
        handler.handle("C", [OrderItemSpec("P", 5)])
        assert product_repo.quantity_of("P") == 0

    def test_repeated_product_entries_kept_as_separate_lines(self):
        handler, _, product_repo, _ = _setup()
        order = handler.handle("C", [OrderItemSpec("P", 2), OrderItemSpec("P", 1)])
        assert len(order.items) == 2
        assert product_repo.quantity_of("P") == 2


class TestCreateOrderPriceLock:

    def test_price_snapshot_at_creation(self):
        handler, order_repo, product_repo, _ = _setup()
        order = handler.handle("C", [OrderItemSpec("P", 1)])

        # Change the catalog price afterwards
        widget = product_repo.find_all_by_id(["P"])[0]
        widget.price = Money.of("99.99")
        product_repo.save(widget)

        saved = order_repo.get_by_id(order.id)
        assert str(saved.total) == "$10.00"


class TestCreateOrderNotIdempotent:

    def test_same_request_twice_creates_two_orders(self):
        handler, order_repo, product_repo, _ = _setup()

        first = handler.handle("C", [OrderItemSpec("P", 2)])
        second = handler.handle("C", [OrderItemSpec("P", 2)])

        assert first.id != second.id
        assert order_repo.count() == 2
        assert product_repo.quantity_of("P") == 1


class TestCreateOrderValidation:

    def test_unknown_customer_rejected_without_catalog_reads(self):
        handler, order_repo, product_repo, _ = _setup()
        with pytest.raises(CustomerNotFoundError, match="Customer not found"):
            handler.handle("nobody", [OrderItemSpec("P", 1)])
        assert product_repo.find_calls == []
        assert order_repo.count() == 0

    def test_all_products_unknown(self):
        handler, order_repo, _, _ = _setup()
        with pytest.raises(ProductsNotFoundError):
            handler.handle("C", [OrderItemSpec("X", 1), OrderItemSpec("Y", 1)])
        assert order_repo.count() == 0

    def test_empty_request_finds_no_products(self):
        handler, _, _, _ = _setup()
        with pytest.raises(ProductsNotFoundError):
            handler.handle("C", [])

    def test_first_unknown_product_reported(self):
        handler, order_repo, product_repo, _ = _setup()
        with pytest.raises(ProductNotFoundError) as exc_info:
            handler.handle("C", [
                OrderItemSpec("P", 1),
                OrderItemSpec("X", 1),
                OrderItemSpec("Y", 1),
            ])
        assert exc_info.value.product_id == "X"
        assert isinstance(exc_info.value, EntityNotFoundError)
        assert order_repo.count() == 0
        assert product_repo.update_calls == []

    def test_first_out_of_stock_item_reported(self):
        handler, order_repo, product_repo, _ = _setup()
        with pytest.raises(OutOfStockError) as exc_info:
            handler.handle("C", [
                OrderItemSpec("Q", 1),
                OrderItemSpec("P", 6),
                OrderItemSpec("R", 1),
            ])
        assert exc_info.value.product_id == "P"
        assert exc_info.value.requested == 6
        assert exc_info.value.available == 5
        assert order_repo.count() == 0
        assert product_repo.update_calls == []
        assert product_repo.quantity_of("Q") == 20

    def test_out_of_stock_is_a_validation_error(self):
        handler, _, _, _ = _setup()
        with pytest.raises(ValidationError, match="out of stock"):
            handler.handle("C", [OrderItemSpec("R", 1)])

    def test_repeated_entries_checked_against_shared_stock(self):
        handler, order_repo, product_repo, _ = _setup()
        with pytest.raises(OutOfStockError) as exc_info:
            handler.handle("C", [OrderItemSpec("P", 3), OrderItemSpec("P", 3)])
        assert exc_info.value.requested == 6
        assert order_repo.count() == 0
        assert product_repo.quantity_of("P") == 5

    def test_non_positive_quantity_rejected(self):
        handler, _, product_repo, customer_repo = _setup()
        with pytest.raises(ValidationError, match="must be positive"):
            handler.handle("C", [OrderItemSpec("P", 0)])
        assert customer_repo.lookups == []
        assert product_repo.find_calls == []


class TestCreateOrderStorageFailures:

    def test_persistence_failure_surfaces_and_leaves_stock(self):
        handler, _, product_repo, _ = _setup(order_repo=FailingOrderRepository())
        with pytest.raises(OSError, match="disk full"):
            handler.handle("C", [OrderItemSpec("P", 1)])
        assert product_repo.update_calls == []
        assert product_repo.quantity_of("P") == 5

    def test_stock_update_failure_keeps_order_and_logs_critical(self):
        handler, order_repo, _, _ = _setup(
            product_repo_cls=FailingUpdateProductRepository
        )

        with capture_logs() as logs:
            with pytest.raises(OSError, match="catalog unavailable"):
                handler.handle("C", [OrderItemSpec("P", 1)])

        assert order_repo.count() == 1
        failures = [e for e in logs if e["event"] == "order.stock_update_failed"]
        assert len(failures) == 1
        assert failures[0]["log_level"] == "critical"
        assert failures[0]["order_id"] == 1
        assert failures[0]["customer_id"] == "C"


class TestCreateOrderLogging:

    def test_success_emits_created_event(self):
        handler, _, _, _ = _setup()
        with capture_logs() as logs:
            order = handler.handle("C", [OrderItemSpec("P", 3)])

        events = [e["event"] for e in logs]
        assert events[0] == "order.creation_started"
        assert "order.stock_decremented" in events
        created = [e for e in logs if e["event"] == "order.created"][0]
        assert created["order_id"] == order.id
        assert created["total"] == "$30.00"


class TestCreateOrderConcurrency:

    def test_concurrent_orders_cannot_oversell(self):
        handler, order_repo, product_repo, _ = _setup()
        start = threading.Barrier(2)

        def place() -> str:
            start.wait()
            try:
                handler.handle("C", [OrderItemSpec("P", 3)])
            except OutOfStockError:
                return "out_of_stock"
            return "created"

        with ThreadPoolExecutor(max_workers=2) as pool:
            futures = [pool.submit(place), pool.submit(place)]
            outcomes = sorted(f.result() for f in futures)

        assert outcomes == ["created", "out_of_stock"]
        assert order_repo.count() == 1
        assert product_repo.quantity_of("P") == 2

    def test_many_single_unit_orders_stop_at_zero(self):
        handler, order_repo, product_repo, _ = _setup()

        def place(_: int) -> bool:
            try:
                handler.handle("C", [OrderItemSpec("P", 1)])
            except OutOfStockError:
                return False
            return True

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(place, range(10)))

        assert results.count(True) == 5
        assert order_repo.count() == 5
        assert product_repo.quantity_of("P") == 0
