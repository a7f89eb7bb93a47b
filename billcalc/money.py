from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP

from billcalc.constants import DISPLAY_STEP

ZERO = Decimal("0")
ONE = Decimal("1")
HUNDRED = Decimal("100")


def to_dec(x, default: str = "0") -> Decimal:
    """Convert raw form input to ``Decimal``.

    Any None/empty/invalid/non-finite value becomes ``Decimal(default)``.
    Comma decimal separators are accepted.
    """
    try:
        if isinstance(x, Decimal):
            return x if x.is_finite() else Decimal(default)
        if x is None or isinstance(x, bool):
            return Decimal(default)
        s = str(x).strip().replace(",", ".")
        if not s:
            return Decimal(default)
        d = Decimal(s)
        return d if d.is_finite() else Decimal(default)
    except Exception:
        return Decimal(default)


def round_to_step(
    value: Decimal, step: Decimal, rounding=ROUND_HALF_UP
) -> Decimal:
    """Round ``value`` to the nearest ``step`` (e.g. 0.01 or 0.05)."""
    if step == 0:
        return value
    quant = (value / step).quantize(Decimal("1"), rounding=rounding)
    return (quant * step).quantize(step)


def q2(x) -> Decimal:
    """Round for display using the configured step (0.01 by default)."""
    return round_to_step(to_dec(x), DISPLAY_STEP)


def pct_of(amount: Decimal, pct: Decimal) -> Decimal:
    return amount * pct / HUNDRED
