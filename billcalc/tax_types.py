"""Tax-type catalogue: maps an invoice tax type to its nominal percent."""

from __future__ import annotations

import logging
from decimal import Decimal

from billcalc.codes import RateType
from billcalc.money import ZERO, to_dec

log = logging.getLogger(__name__)

# key -> (label, nominal percent)
TAX_TYPES: dict[str, tuple[str, Decimal]] = {
    "no_tax": ("No Tax", Decimal("0")),
    "local_registered": ("Local - registered", Decimal("18")),
    "outstate": ("Outstate", Decimal("18")),
    "import_deemed": ("Import deemed", Decimal("18")),
    "import_with_igst": ("Import with IGST", Decimal("18")),
    "import_under_bond": ("Import under bond/LUT", Decimal("0")),
    "merchant_export_local": ("Merchant export Local", Decimal("0")),
    "merchant_export_outstate": ("Merchant export outstate", Decimal("0")),
}


def nominal_rate(tax_type) -> Decimal:
    """Return the nominal tax percent for ``tax_type``.

    ``tax_type`` may be a catalogue key, a number (used as the percent
    directly) or ``None``. Unknown keys carry no tax.
    """
    if tax_type is None:
        return ZERO
    if isinstance(tax_type, (int, float, Decimal)) and not isinstance(tax_type, bool):
        return to_dec(tax_type)
    key = str(tax_type).strip().lower()
    if not key:
        return ZERO
    if key in TAX_TYPES:
        return TAX_TYPES[key][1]
    numeric = to_dec(key, default="NaN")
    if numeric.is_finite():
        return numeric
    log.warning("Unknown tax type %r, treating it as untaxed", tax_type)
    return ZERO


def is_taxed(tax_type) -> bool:
    return nominal_rate(tax_type) > 0


def default_rate_type(tax_type, preferred=None) -> RateType:
    """Rate type a new invoice should start with for ``tax_type``.

    Untaxed invoices always price without tax; taxed ones keep ``preferred``
    when given.
    """
    if not is_taxed(tax_type):
        return RateType.WITHOUT_TAX
    if preferred:
        return RateType.parse(preferred)
    from billcalc.constants import DEFAULT_RATE_TYPE

    return RateType.parse(DEFAULT_RATE_TYPE)
