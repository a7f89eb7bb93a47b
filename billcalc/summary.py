"""Display tables for the item grid and the totals panel.

This is the rounding boundary: every amount leaving here is rounded with
:func:`billcalc.money.q2`, the engine itself never rounds.
"""
from __future__ import annotations

from decimal import Decimal

import pandas as pd

from billcalc.models import Invoice, InvoiceTotals
from billcalc.money import q2

# Mapping of ItemFigures / LineItem attributes to column headers.
ITEM_COLUMN_DEFS = [
    ("name", "Item"),
    ("code", "Code"),
    ("quantity", "Qty"),
    ("rate", "Rate"),
    ("rate_without_tax", "Rate (without tax)"),
    ("rate_with_tax", "Rate (with tax)"),
    ("tax_rate", "Tax (%)"),
    ("subtotal", "Subtotal"),
    ("discount_amount", "Discount"),
    ("tax_amount", "Tax"),
    ("total", "Total"),
]
ITEM_COLS = [header for _, header in ITEM_COLUMN_DEFS]

TOTALS_ROWS = [
    ("basic_amount", "Basic amount"),
    ("item_level_discount_total", "Item discounts"),
    ("invoice_level_discount", "Invoice discount"),
    ("total_discount", "Total discount"),
    ("tax_amount", "Tax"),
    ("transportation_charge", "Transportation"),
    ("round_off", "Round off"),
    ("net_payable", "Net payable"),
]


def fmt_amount(v) -> str:
    """Return ``v`` as a string without trailing zeros."""
    if v is None or (not isinstance(v, Decimal) and pd.isna(v)):
        return ""
    d = v if isinstance(v, Decimal) else Decimal(str(v))
    s = format(d, "f")
    return s.rstrip("0").rstrip(".") if "." in s else s


def items_frame(totals: InvoiceTotals, invoice: Invoice) -> pd.DataFrame:
    """Return one rounded row per item, in invoice order."""
    records = []
    for item, fig in zip(invoice.items, totals.items):
        records.append(
            {
                "Item": item.name,
                "Code": item.code,
                "Qty": fig.quantity,
                "Rate": q2(item.rate),
                "Rate (without tax)": q2(fig.rate_without_tax),
                "Rate (with tax)": q2(fig.rate_with_tax),
                "Tax (%)": item.tax_rate,
                "Subtotal": q2(fig.subtotal),
                "Discount": q2(fig.discount_amount),
                "Tax": q2(fig.tax_amount),
                "Total": q2(fig.total),
            }
        )
    df = pd.DataFrame.from_records(records, coerce_float=False)
    return df.reindex(columns=ITEM_COLS)


def totals_to_dict(totals: InvoiceTotals) -> dict[str, Decimal]:
    return {key: q2(getattr(totals, key)) for key, _ in TOTALS_ROWS}


def totals_frame(totals: InvoiceTotals) -> pd.DataFrame:
    rounded = totals_to_dict(totals)
    return pd.DataFrame(
        {
            "label": [label for _, label in TOTALS_ROWS],
            "amount": [rounded[key] for key, _ in TOTALS_ROWS],
        }
    )
