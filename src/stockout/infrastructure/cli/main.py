import click

from stockout.infrastructure.bootstrap import setup_logging
from stockout.infrastructure.cli.item_commands import item_list, item_search
from stockout.infrastructure.cli.session_commands import session_out
from stockout.infrastructure.cli.stock_commands import stock_in, stock_out


@click.group()
def cli() -> None:
    """Stock-Out: batch stock removal against the inventory service"""
    setup_logging()


@cli.group()
def items() -> None:
    """Browse the catalog."""


@cli.group()
def stock() -> None:
    """Single-item stock movements."""


# Register subcommands
cli.add_command(session_out)
items.add_command(item_list)
items.add_command(item_search)
stock.add_command(stock_in)
stock.add_command(stock_out)
