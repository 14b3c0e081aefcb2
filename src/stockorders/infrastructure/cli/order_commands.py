"""CLI commands for orders."""

from __future__ import annotations

import click

from stockorders.application.dto import OrderDTO, OrderItemSpec, to_order_dto
from stockorders.domain.exceptions import DomainException
from stockorders.infrastructure.bootstrap import create_order_handler, show_order_handler
from stockorders.infrastructure.cli.errors import to_click_exception


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse 'p-1:3,p-2:5' into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductId:Quantity'."
            )
        product_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        specs.append(OrderItemSpec(product_id=product_id.strip(), quantity=qty))
    return specs


def _display_order(dto: OrderDTO) -> None:
    click.echo(f"Customer: {dto.customer_id}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        click.echo(
            f"  {item.product_id:<20} {item.quantity:>5} {item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Order Total':<27} {dto.total:>20}")


@click.command("create")
@click.option("--customer", required=True, help="Customer ID.")
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
def order_create(customer: str, items: str) -> None:
    """Create a new order and take the ordered units out of stock."""
    specs = _parse_items(items)
    handler = create_order_handler()

    try:
        order = handler.handle(customer_id=customer, item_specs=specs)
    except DomainException as exc:
        raise to_click_exception(exc)

    click.echo(f"Order #{order.id} created")
    _display_order(to_order_dto(order))


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
def order_show(order_id: int) -> None:
    """Show details of an existing order."""
    handler = show_order_handler()

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise to_click_exception(exc)

    click.echo(f"Order #{dto.id}")
    _display_order(dto)
