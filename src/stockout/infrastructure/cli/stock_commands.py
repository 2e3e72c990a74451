"""CLI commands for single-item stock movements."""

from __future__ import annotations

import asyncio

import click

from stockout.domain.exceptions import DomainException
from stockout.domain.model.commit import MovementDirection
from stockout.infrastructure.bootstrap import record_movement_handler


def _record(code: str, direction: MovementDirection, quantity: int) -> None:
    handler = record_movement_handler()

    try:
        item = asyncio.run(handler.handle(code, direction, quantity))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    verb = "added to" if direction is MovementDirection.IN else "removed from"
    click.echo(f"{quantity} x {item.code} {verb} stock (now {item.quantity_on_hand})")


@click.command("in")
@click.option("--code", required=True, help="Item code.")
@click.option("--quantity", required=True, type=int, help="Units received.")
def stock_in(code: str, quantity: int) -> None:
    """Record incoming stock for one item."""
    _record(code, MovementDirection.IN, quantity)


@click.command("out")
@click.option("--code", required=True, help="Item code.")
@click.option("--quantity", required=True, type=int, help="Units removed.")
def stock_out(code: str, quantity: int) -> None:
    """Remove stock for one item without going through the cart."""
    _record(code, MovementDirection.OUT, quantity)
