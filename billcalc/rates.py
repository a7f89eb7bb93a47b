"""Conversion of unit rates between tax-inclusive and tax-exclusive form.

Both functions expect an already validated percent in ``[0, 100]`` and never
round; round only when a figure is displayed or stored.
"""
from __future__ import annotations

from decimal import Decimal

from billcalc.money import HUNDRED, ONE, to_dec


def _factor(tax_rate_pct: Decimal) -> Decimal:
    return ONE + to_dec(tax_rate_pct) / HUNDRED


def to_base(rate, tax_rate_pct) -> Decimal:
    """Strip tax from a tax-inclusive ``rate``."""
    rate = to_dec(rate)
    if to_dec(tax_rate_pct) == 0:
        return rate
    return rate / _factor(tax_rate_pct)


def to_inclusive(base_rate, tax_rate_pct) -> Decimal:
    """Add tax to a tax-exclusive ``base_rate``."""
    base_rate = to_dec(base_rate)
    if to_dec(tax_rate_pct) == 0:
        return base_rate
    return base_rate * _factor(tax_rate_pct)


def within_tolerance(a, b, tolerance: Decimal) -> bool:
    """Return ``True`` when ``a`` and ``b`` differ by at most ``tolerance``
    relative to the larger magnitude (absolute near zero)."""
    a, b = to_dec(a), to_dec(b)
    scale = max(abs(a), abs(b), ONE)
    return abs(a - b) <= tolerance * scale
