"""Fill empty stores with demo data for local use."""

from __future__ import annotations

import click

from stockorders.domain.model.customer import Customer
from stockorders.domain.model.product import CatalogProduct
from stockorders.domain.model.value_objects import Money
from stockorders.infrastructure.bootstrap import customer_repository, product_repository

_SEED_CUSTOMERS = [
    ("c-1", "Ana Souza", "ana@example.com"),
    ("c-2", "Bruno Lima", "bruno@example.com"),
    ("c-3", "Carla Mendes", "carla@example.com"),
]

_SEED_PRODUCTS = [
    ("p-1", "Widget", "10.00", 5),
    ("p-2", "Gadget", "25.00", 20),
    ("p-3", "Gizmo", "7.50", 100),
]


@click.command("seed")
def seed() -> None:
    """Write demo customers and products into empty stores."""
    customers = customer_repository()
    products = product_repository()

    seeded_customers = 0
    if not customers.list_all():
        for customer_id, name, email in _SEED_CUSTOMERS:
            customers.save(Customer(id=customer_id, name=name, email=email))
            seeded_customers += 1

    seeded_products = 0
    if not products.list_all():
        for product_id, name, price, quantity in _SEED_PRODUCTS:
            products.save(
                CatalogProduct(id=product_id, name=name, price=Money.of(price), quantity=quantity)
            )
            seeded_products += 1

    click.echo(f"Seed completed: customers={seeded_customers}, products={seeded_products}")
