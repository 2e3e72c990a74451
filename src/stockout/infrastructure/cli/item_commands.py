"""CLI commands for browsing the catalog."""

from __future__ import annotations

import asyncio

import click

from stockout.application.dto import ItemDTO
from stockout.domain.exceptions import DomainException
from stockout.infrastructure.bootstrap import catalog_repository, inventory_gateway


def _display_items(items: list[ItemDTO]) -> None:
    if not items:
        click.echo("No items found.")
        return

    click.echo(f"{'No':>3}  {'Code':<12} {'Name':<24} {'Qty':>6} {'Price':>16}")
    click.echo("-" * 66)
    for index, item in enumerate(items, start=1):
        click.echo(
            f"{index:>3}  {item.code:<12} {item.name:<24} "
            f"{item.quantity_on_hand:>6} {item.unit_price:>16}"
        )


def _load(query: str | None) -> list[ItemDTO]:
    catalog = catalog_repository(inventory_gateway())
    try:
        snapshot = asyncio.run(catalog.load(query))
    except DomainException as exc:
        raise click.ClickException(str(exc))
    return [ItemDTO.from_item(item) for item in snapshot]


@click.command("list")
def item_list() -> None:
    """List every item in the catalog."""
    _display_items(_load(None))


@click.command("search")
@click.argument("query")
def item_search(query: str) -> None:
    """Search items by code or name (filtered by the service)."""
    _display_items(_load(query))
