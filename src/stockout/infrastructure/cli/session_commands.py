"""Interactive stock-out session on the terminal.

Every line typed at the ``search`` prompt is either a command or a new
query fragment:

    <text>          search candidates by code / name
    :n  :p          move the highlight down / up
    <empty> / :ok   confirm the highlighted candidate
    #<n>            pick candidate number n
    :cart           show the cart
    :rm CODE        remove a line
    :qty CODE N     overwrite a line's quantity
    :commit         submit the cart as one batch
    :cancel         empty the cart
    :reload         reload the catalog
    :q              quit
"""

from __future__ import annotations

import asyncio

import click

from stockout.application.stock_out_session import Focus, StockOutSession
from stockout.domain.exceptions import DomainException, EntityNotFoundError
from stockout.infrastructure.bootstrap import stock_out_session

_KEYS = {":n": "down", ":p": "up", ":ok": "enter", "": "enter"}


def _show_candidates(session: StockOutSession) -> None:
    candidates = session.candidates()
    if not candidates:
        if session.state.query.strip():
            click.echo("  (no match)")
        return
    for c in candidates:
        marker = ">" if c.highlighted else " "
        click.echo(
            f" {marker}{c.position}. {c.item.code:<12} {c.item.name:<24} "
            f"stock {c.item.quantity_on_hand}"
        )


def _show_cart(session: StockOutSession) -> None:
    dto = session.cart_view()
    if not dto.lines:
        click.echo("Cart is empty.")
        return
    click.echo(f"  {'Code':<12} {'Name':<20} {'Qty':>5} {'Price':>14} {'Total':>14}")
    click.echo(f"  {'-'*69}")
    for line in dto.lines:
        click.echo(
            f"  {line.code:<12} {line.name:<20} {line.quantity:>5} "
            f"{line.unit_price:>14} {line.line_total:>14}"
        )
    click.echo(f"  {'-'*69}")
    click.echo(f"  {'Cart Total':<39} {dto.total:>30}")


def _resolve_line(session: StockOutSession, code: str):
    for line in session.state.cart.lines:
        if line.code.casefold() == code.casefold():
            return line.item_id
    raise EntityNotFoundError(f"'{code}' is not in the cart")


def _enter_quantity(session: StockOutSession) -> None:
    item = session.state.selected
    while session.state.focus is Focus.QUANTITY:
        raw = click.prompt(f"quantity for {item.code} (:x to skip)")
        if raw.strip() == ":x":
            session.type_query("")
            return
        try:
            session.add(int(raw))
        except ValueError:
            click.echo(f"Error: '{raw}' is not a whole number", err=True)
        except DomainException as exc:
            click.echo(f"Error: {exc}", err=True)
    click.echo(f"Added {raw} x {item.code}.")


def _dispatch(session: StockOutSession, line: str) -> bool:
    """Handle one input line; return False to end the session."""
    command, _, rest = line.partition(" ")

    if line == ":q":
        return False
    if line in _KEYS:
        if session.press(_KEYS[line]) is not None:
            _enter_quantity(session)
        else:
            _show_candidates(session)
    elif line.startswith("#") and line[1:].isdigit():
        session.pick(int(line[1:]) - 1)
        _enter_quantity(session)
    elif line == ":cart":
        _show_cart(session)
    elif command == ":rm":
        session.remove(_resolve_line(session, rest.strip()))
        _show_cart(session)
    elif command == ":qty":
        code, _, qty = rest.strip().rpartition(" ")
        try:
            quantity = int(qty)
        except ValueError:
            raise click.BadParameter(f"Invalid quantity '{qty}'.")
        session.set_quantity(_resolve_line(session, code), quantity)
        _show_cart(session)
    elif line == ":commit":
        ack = asyncio.run(session.checkout())
        click.echo(f"Stock-out committed ({ack.line_count} lines).")
    elif line == ":cancel":
        session.cancel()
        click.echo("Cart cleared.")
    elif line == ":reload":
        snapshot = asyncio.run(session.load_catalog())
        click.echo(f"{len(snapshot)} items loaded.")
    else:
        session.type_query(line)
        _show_candidates(session)
    return True


@click.command("out")
def session_out() -> None:
    """Interactive stock-out: search, pick, add to cart, commit."""
    session = stock_out_session()

    try:
        snapshot = asyncio.run(session.load_catalog())
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo(f"{len(snapshot)} items loaded. Type to search, :q to quit.")

    while True:
        line = click.prompt("search", default="", show_default=False).strip()
        try:
            if not _dispatch(session, line):
                break
        except (DomainException, click.BadParameter) as exc:
            click.echo(f"Error: {exc}", err=True)

    if session.state.cart.line_count():
        click.echo(f"Left with {session.state.cart.line_count()} uncommitted line(s).")
