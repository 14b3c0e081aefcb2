"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from stockorders.application.create_order import CreateOrderHandler
from stockorders.application.show_order import ShowOrderHandler
from stockorders.infrastructure.config import Settings, load_settings
from stockorders.infrastructure.persistence.json_customer_repository import (
    JsonCustomerRepository,
)
from stockorders.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from stockorders.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)


def customer_repository(settings: Settings | None = None) -> JsonCustomerRepository:
    settings = settings or load_settings()
    return JsonCustomerRepository(settings.data_dir / "customers.json")


def product_repository(settings: Settings | None = None) -> JsonProductRepository:
    settings = settings or load_settings()
    return JsonProductRepository(settings.data_dir / "products.json")


def order_repository(settings: Settings | None = None) -> JsonOrderRepository:
    settings = settings or load_settings()
    return JsonOrderRepository(settings.data_dir / "orders.json")


def create_order_handler(settings: Settings | None = None) -> CreateOrderHandler:
    return CreateOrderHandler(
        order_repo=order_repository(settings),
        product_repo=product_repository(settings),
        customer_repo=customer_repository(settings),
    )


def show_order_handler(settings: Settings | None = None) -> ShowOrderHandler:
    return ShowOrderHandler(order_repo=order_repository(settings))
