from __future__ import annotations

import logging

from billcalc.calculator import calculate_item
from billcalc.codes import DiscountValueType
from billcalc.models import Invoice, InvoiceTotals
from billcalc.money import ZERO, pct_of
from billcalc.quantity import resolve_quantity

log = logging.getLogger(__name__)


def invoice_discount(invoice: Invoice, item_totals_sum):
    """Return the invoice-level discount for ``invoice``.

    Only scopes that include the invoice produce a discount. A fixed value is
    subtracted once from the aggregate, it is not apportioned over items.
    """
    if not invoice.discount_scope.includes_invoice:
        return ZERO
    if invoice.discount_value_type == DiscountValueType.PERCENTAGE:
        return pct_of(item_totals_sum, invoice.discount_value)
    return invoice.discount_value


def aggregate(invoice: Invoice) -> InvoiceTotals:
    """Re-derive every invoice figure from the current items and settings.

    Returns
    -------
    InvoiceTotals
        Unrounded totals together with the per-item figures in item order.
    """
    tax_enabled = invoice.tax_enabled
    figures = tuple(
        calculate_item(item, resolve_quantity(item), tax_enabled=tax_enabled)
        for item in invoice.items
    )

    basic_amount = sum((f.subtotal for f in figures), ZERO)
    item_discount = sum((f.discount_amount for f in figures), ZERO)
    item_totals_sum = sum((f.total for f in figures), ZERO)
    tax_amount = sum((f.tax_amount for f in figures), ZERO)

    inv_discount = invoice_discount(invoice, item_totals_sum)
    net_payable = (
        item_totals_sum
        - inv_discount
        + invoice.transportation_charge
        + invoice.round_off
    )

    log.debug(
        "TOTALS items=%d basic=%s disc=%s+%s tax=%s net=%s",
        len(figures),
        basic_amount,
        item_discount,
        inv_discount,
        tax_amount,
        net_payable,
    )
    return InvoiceTotals(
        items=figures,
        basic_amount=basic_amount,
        item_level_discount_total=item_discount,
        item_totals_sum=item_totals_sum,
        invoice_level_discount=inv_discount,
        total_discount=item_discount + inv_discount,
        tax_amount=tax_amount,
        transportation_charge=invoice.transportation_charge,
        round_off=invoice.round_off,
        net_payable=net_payable,
    )
