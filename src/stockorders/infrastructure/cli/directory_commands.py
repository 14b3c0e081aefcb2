"""Read-only CLI listings for the catalog and the customer directory."""

from __future__ import annotations

import click

from stockorders.infrastructure.bootstrap import customer_repository, product_repository


@click.command("list")
def product_list() -> None:
    """List all products with their price and stock."""
    products = product_repository().list_all()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<12} {'Name':<20} {'Price':>10} {'Stock':>7}")
    click.echo("-" * 52)
    for p in products:
        click.echo(f"{p.id:<12} {p.name:<20} {str(p.price):>10} {p.quantity:>7}")


@click.command("list")
def customer_list() -> None:
    """List all customers."""
    customers = customer_repository().list_all()

    if not customers:
        click.echo("No customers found.")
        return

    click.echo(f"{'ID':<12} {'Name':<20} {'Email':<30}")
    click.echo("-" * 64)
    for c in customers:
        click.echo(f"{c.id:<12} {c.name:<20} {c.email:<30}")
