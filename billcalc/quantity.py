from __future__ import annotations

from decimal import Decimal

from billcalc.models import LineItem


def resolve_quantity(item: LineItem) -> Decimal:
    """Return the quantity used for pricing ``item``.

    Serialized items count their distinct serial numbers and ignore any
    stale entered quantity. Other items return the entered quantity as is;
    non-positive values are reported by :mod:`billcalc.validation`.
    """
    if item.is_serialized:
        return Decimal(len(item.serial_numbers))
    return item.entered_quantity
