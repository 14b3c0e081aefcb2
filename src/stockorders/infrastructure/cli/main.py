import click

from stockorders.infrastructure.cli.directory_commands import customer_list, product_list
from stockorders.infrastructure.cli.order_commands import order_create, order_show
from stockorders.infrastructure.cli.seed_command import seed
from stockorders.infrastructure.config import load_settings
from stockorders.infrastructure.logging_config import configure_logging


@click.group()
def cli() -> None:
    """stockorders: stock-checked order entry"""
    settings = load_settings()
    configure_logging(level=settings.log_level, json_output=settings.log_json)


@cli.group()
def order() -> None:
    """Create and inspect orders."""


@cli.group()
def product() -> None:
    """Inspect the product catalog."""


@cli.group()
def customer() -> None:
    """Inspect the customer directory."""


# Register subcommands
order.add_command(order_create)
order.add_command(order_show)
product.add_command(product_list)
customer.add_command(customer_list)
cli.add_command(seed)
