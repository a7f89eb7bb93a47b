"""Re-express item rates when the invoice rate type changes."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, List

from billcalc.codes import RateType
from billcalc.models import LineItem
from billcalc.rates import to_base, to_inclusive

log = logging.getLogger(__name__)


def migrate_rate_type(
    items: Iterable[LineItem],
    old_rate_type,
    new_rate_type,
    *,
    tax_enabled: bool = True,
) -> List[LineItem]:
    """Return copies of ``items`` priced in ``new_rate_type``.

    Each item keeps its tax-exclusive value: a ``without_tax`` rate gains the
    item's tax when moving to ``with_tax`` and loses it on the way back.
    Items without tax keep their rate and only change their tag, and so does
    every item when ``tax_enabled`` is ``False`` (the invoice tax type carries
    no tax). When both rate types are equal the items are returned unchanged.
    """
    old = RateType.parse(old_rate_type)
    new = RateType.parse(new_rate_type)
    items = list(items)
    if old == new:
        return items

    migrated = []
    for item in items:
        rate = item.rate
        if tax_enabled and item.tax_rate > 0:
            if new == RateType.WITH_TAX:
                rate = to_inclusive(item.rate, item.tax_rate)
            else:
                rate = to_base(item.rate, item.tax_rate)
        migrated.append(replace(item, rate=rate, rate_type=new))

    log.debug("Migrated %d items from %s to %s", len(migrated), old.value, new.value)
    return migrated
