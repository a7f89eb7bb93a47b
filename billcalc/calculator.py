"""Per-line tax and discount calculation.

:func:`calculate_item` is pure: identical inputs give identical
``Decimal`` results and nothing is rounded. Callers round with
:func:`billcalc.money.q2` when figures are displayed.
"""
from __future__ import annotations

import logging
from decimal import Decimal

from billcalc.codes import DiscountValueType, RateType
from billcalc.constants import DISCOUNT_OVERFLOW_POLICY, TRACE_ITEMS
from billcalc.models import ItemFigures, LineItem
from billcalc.money import ZERO, pct_of, to_dec
from billcalc.quantity import resolve_quantity
from billcalc.rates import to_base, to_inclusive

log = logging.getLogger(__name__)


class DiscountExceedsSubtotal(ValueError):
    """Raised under the ``error`` overflow policy."""

    def __init__(self, discount: Decimal, subtotal: Decimal):
        super().__init__(
            f"Line discount {discount} exceeds line subtotal {subtotal}"
        )
        self.discount = discount
        self.subtotal = subtotal


def line_discount(
    subtotal: Decimal, value_type: DiscountValueType, value: Decimal
) -> Decimal:
    """Return the discount of a line bounded to ``[0, subtotal]``.

    Fixed discounts are a flat amount for the whole line.
    """
    if value_type == DiscountValueType.PERCENTAGE:
        raw = pct_of(subtotal, value)
    else:
        raw = value
    if raw < 0:
        return ZERO
    if raw > subtotal:
        if DISCOUNT_OVERFLOW_POLICY == "error":
            raise DiscountExceedsSubtotal(raw, subtotal)
        log.debug("Clamping line discount %s to subtotal %s", raw, subtotal)
        return max(subtotal, ZERO)
    return raw


def calculate_item(
    item: LineItem, quantity=None, *, tax_enabled: bool = True
) -> ItemFigures:
    """Compute subtotal, discount, tax and total for one line.

    Parameters
    ----------
    item:
        The line item with its raw inputs.
    quantity:
        Effective quantity; defaults to :func:`resolve_quantity`.
    tax_enabled:
        ``False`` when the invoice tax type carries no tax. The item's own
        ``tax_rate`` is then ignored for both rate conversion and tax.
    """
    qty = resolve_quantity(item) if quantity is None else to_dec(quantity)
    tax_pct = item.tax_rate if tax_enabled else ZERO

    if item.rate_type == RateType.WITH_TAX:
        base_rate = to_base(item.rate, tax_pct)
    else:
        base_rate = item.rate
    rate_with_tax = to_inclusive(base_rate, tax_pct)

    subtotal = base_rate * qty
    discount = line_discount(
        subtotal, item.discount_value_type, item.discount_value
    )
    taxable = subtotal - discount
    tax = pct_of(taxable, tax_pct)
    total = taxable + tax

    if TRACE_ITEMS:
        log.debug(
            "ITEM %s qty=%s base=%s sub=%s disc=%s tax=%s total=%s",
            item.code or item.name,
            qty,
            base_rate,
            subtotal,
            discount,
            tax,
            total,
        )

    return ItemFigures(
        quantity=qty,
        rate_without_tax=base_rate,
        rate_with_tax=rate_with_tax,
        subtotal=subtotal,
        discount_amount=discount,
        taxable_base=taxable,
        tax_amount=tax,
        total=total,
    )
