"""Build :class:`~billcalc.models.Invoice` objects from raw form payloads."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping

from billcalc.models import Invoice, LineItem
from billcalc.tax_types import default_rate_type

log = logging.getLogger(__name__)


def _pick(raw: Mapping[str, Any], *keys, default=None):
    """Return the first present, non-empty value among ``keys``."""
    for key in keys:
        if key in raw and raw[key] not in (None, ""):
            return raw[key]
    return default


def item_from_mapping(raw: Mapping[str, Any], *, default_rate_type) -> LineItem:
    serials = _pick(raw, "serialNumbers", "serial_numbers", default=()) or ()
    is_serialized = _pick(raw, "isSerialized", "is_serialized", default=False)
    if isinstance(is_serialized, str):
        is_serialized = is_serialized.strip().lower() in {"1", "true", "yes"}
    return LineItem(
        product_id=_pick(raw, "productId", "product_id"),
        name=str(_pick(raw, "name", default="")),
        code=str(_pick(raw, "code", default="")),
        entered_quantity=_pick(raw, "quantity", "qty", default=0),
        is_serialized=bool(is_serialized),
        serial_numbers=tuple(serials),
        rate=_pick(raw, "rate", default=0),
        rate_type=_pick(raw, "rateType", "rate_type", default=default_rate_type),
        tax_rate=_pick(raw, "taxRate", "tax_rate", default=0),
        discount_value_type=_pick(
            raw,
            "discountValueType",
            "discount_value_type",
            "discountType",
            default="percentage",
        ),
        discount_value=_pick(
            raw, "discountValue", "discount_value", "discountRate", default=0
        ),
    )


def invoice_from_mapping(raw: Mapping[str, Any]) -> Invoice:
    """Create an invoice from camelCase or snake_case keys.

    Items without their own rate type inherit the invoice rate type; an
    invoice without one gets :func:`default_rate_type` for its tax type.
    """
    tax_type = _pick(raw, "taxType", "tax_type", default="no_tax")
    rate_type = default_rate_type(
        tax_type, _pick(raw, "rateType", "rate_type")
    )
    items = [
        item_from_mapping(r, default_rate_type=rate_type)
        for r in raw.get("items") or []
    ]
    return Invoice(
        tax_type=tax_type,
        rate_type=rate_type,
        discount_scope=_pick(raw, "discountScope", "discount_scope", default="none"),
        discount_value_type=_pick(
            raw, "discountValueType", "discount_value_type", default="percentage"
        ),
        discount_value=_pick(raw, "discountValue", "discount_value", default=0),
        transportation_charge=_pick(
            raw, "transportationCharge", "transportation_charge", default=0
        ),
        round_off=_pick(raw, "roundOff", "round_off", default=0),
        items=items,
    )


def load_invoice(path: Path | str) -> Invoice:
    path = Path(path)
    log.debug("Reading invoice document %s", path)
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path.name}: expected a JSON object")
    return invoice_from_mapping(data)
