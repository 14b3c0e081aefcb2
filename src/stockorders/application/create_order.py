"""Application service: Create Order use case.

Orchestrates the customer directory, the product catalog and the order
store. This is the only place that touches all three.
"""

from __future__ import annotations

import structlog

from stockorders.application.dto import OrderItemSpec
from stockorders.domain.exceptions import (
    CustomerNotFoundError,
    OutOfStockError,
    ProductNotFoundError,
    ProductsNotFoundError,
)
from stockorders.domain.model.order import NewOrder, NewOrderLineItem, Order
from stockorders.domain.model.product import CatalogProduct, StockUpdate
from stockorders.domain.model.value_objects import Quantity
from stockorders.domain.repository.customer_repository import CustomerRepository
from stockorders.domain.repository.order_repository import OrderRepository
from stockorders.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        customer_repo: CustomerRepository,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._customer_repo = customer_repo

    def handle(self, customer_id: str, item_specs: list[OrderItemSpec]) -> Order:
        """Create a new order and decrement stock for it.

        Steps:
        1. Resolve the customer (fail if not found).
        2. Resolve every requested product (fail on the first missing one).
        3. Check stock for every item (fail on the first short one).
        4. Build line items with *current* catalog prices (snapshot).
        5. Persist order + line items in one call.
        6. Decrement stock for every involved product in one batch.

        Steps 2-6 run while the catalog holds the involved products
        locked, so two orders cannot both pass step 3 against the same
        stock level. Steps 1-4 have no side effects.

        Calling this twice with the same input creates two orders.
        """
        log = logger.bind(customer_id=customer_id)
        requested = [(spec.product_id, Quantity(spec.quantity)) for spec in item_specs]
        log.info("order.creation_started", items=len(requested))

        customer = self._customer_repo.find_by_id(customer_id)
        if customer is None:
            raise CustomerNotFoundError(customer_id)

        product_ids = list(dict.fromkeys(product_id for product_id, _ in requested))

        with self._product_repo.locked(product_ids):
            catalog = self._resolve_products(product_ids)
            self._check_stock(requested, catalog)

            new_order = NewOrder(
                customer_id=customer.id,
                items=[
                    NewOrderLineItem(
                        product_id=product_id,
                        unit_price=catalog[product_id].price,  # <-- price snapshot
                        quantity=qty,
                    )
                    for product_id, qty in requested
                ],
            )
            order = self._order_repo.create(new_order)
            log = log.bind(order_id=order.id)

            self._decrement_stock(order, catalog, log)

        log.info("order.created", total=str(order.total), line_items=len(order.items))
        return order

    # --- Validation -----------------------------------------------------------

    def _resolve_products(self, product_ids: list[str]) -> dict[str, CatalogProduct]:
        found = self._product_repo.find_all_by_id(product_ids)
        if not found:
            raise ProductsNotFoundError()

        catalog = {product.id: product for product in found}
        for product_id in product_ids:
            if product_id not in catalog:
                raise ProductNotFoundError(product_id)
        return catalog

    @staticmethod
    def _check_stock(
        requested: list[tuple[str, Quantity]],
        catalog: dict[str, CatalogProduct],
    ) -> None:
        # Repeated entries for one product draw on the same stock.
        claimed: dict[str, int] = {}
        for product_id, qty in requested:
            product = catalog[product_id]
            claimed[product_id] = claimed.get(product_id, 0) + qty.value
            if not product.has_stock_for(claimed[product_id]):
                raise OutOfStockError(
                    product_id,
                    requested=claimed[product_id],
                    available=product.quantity,
                )

    # --- Stock ----------------------------------------------------------------

    def _decrement_stock(
        self,
        order: Order,
        catalog: dict[str, CatalogProduct],
        log: structlog.typing.BindableLogger,
    ) -> None:
        updates = [
            StockUpdate(
                product_id=product_id,
                quantity=catalog[product_id].quantity - ordered,
                expected_quantity=catalog[product_id].quantity,
            )
            for product_id, ordered in order.quantities_by_product().items()
        ]

        try:
            self._product_repo.update_quantities(updates)
        except Exception:
            # The order is already stored and is not rolled back.
            log.critical(
                "order.stock_update_failed",
                updates=[(u.product_id, u.expected_quantity, u.quantity) for u in updates],
                exc_info=True,
            )
            raise

        for update in updates:
            log.info(
                "order.stock_decremented",
                product_id=update.product_id,
                remaining=update.quantity,
            )
