# File: billcalc/cli.py
import logging
from pathlib import Path

import click

from billcalc.aggregator import aggregate
from billcalc.calculator import DiscountExceedsSubtotal
from billcalc.loader import load_invoice
from billcalc.money import q2
from billcalc.session import EditSession
from billcalc.summary import items_frame, totals_frame, fmt_amount
from billcalc.validation import validate_invoice


@click.group()
def main():
    """billcalc – CLI for invoice tax and discount totals."""
    logging.basicConfig(level=logging.INFO)


def _load(path: Path):
    try:
        return load_invoice(path)
    except Exception as e:
        click.echo(f"[PARSE ERROR] {path.name}: {e}")
        raise SystemExit(1)


@main.command()
@click.argument("invoice", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--persisted-total",
    type=str,
    default=None,
    help="Net payable stored with the invoice; shown until the invoice is edited",
)
def totals(invoice, persisted_total):
    """Print the item table and the totals panel of an invoice."""
    path = Path(invoice)
    inv = _load(path)
    problems = validate_invoice(inv)
    if problems:
        for problem in problems:
            click.echo(f"[INVALID] {path.name}: {problem}")
        raise SystemExit(1)

    try:
        result = aggregate(inv)
    except DiscountExceedsSubtotal as e:
        click.echo(f"[CALCULATION ERROR] {path.name}: {e}")
        raise SystemExit(1)

    click.echo(items_frame(result, inv).to_string(index=False))
    click.echo("")
    for _, row in totals_frame(result).iterrows():
        click.echo(f"{row['label']:<18}{fmt_amount(row['amount']):>14}")

    session = EditSession(inv, persisted_total)
    if not session.is_live:
        shown = q2(session.net_payable)
        if shown != q2(result.net_payable):
            click.echo(
                f"[STALE] persisted net payable {fmt_amount(shown)} "
                f"!= recomputed {fmt_amount(q2(result.net_payable))}"
            )


@main.command()
@click.argument("invoice", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--to",
    "new_rate_type",
    type=click.Choice(["with_tax", "without_tax"]),
    required=True,
    help="Rate type to re-express the item rates in",
)
def migrate(invoice, new_rate_type):
    """Show item rates after switching the invoice rate type."""
    path = Path(invoice)
    inv = _load(path)
    old = inv.rate_type
    before = [item.rate for item in inv.items]
    inv.change_rate_type(new_rate_type)
    click.echo(f"{old.value} -> {inv.rate_type.value}")
    for item, rate in zip(inv.items, before):
        label = item.name or item.code or item.product_id or "?"
        click.echo(f"{label}: {fmt_amount(q2(rate))} -> {fmt_amount(q2(item.rate))}")


@main.command()
@click.argument("invoices", type=click.Path(exists=True, dir_okay=False), nargs=-1)
def validate(invoices):
    """Validate one or more invoice documents."""
    if not invoices:
        click.echo("Please pass at least one invoice file.")
        return

    failed = False
    for path_str in invoices:
        path = Path(path_str)
        inv = _load(path)
        problems = validate_invoice(inv)
        if problems:
            failed = True
            for problem in problems:
                click.echo(f"[INVALID] {path.name}: {problem}")
        else:
            click.echo(f"[OK]      {path.name}")
    if failed:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
