"""Input checks run by the form layer before the engine is invoked."""

from __future__ import annotations

from typing import List

from billcalc.codes import DiscountValueType
from billcalc.models import Invoice, LineItem
from billcalc.money import HUNDRED, ZERO


class InvoiceValidationError(ValueError):
    def __init__(self, problems: List[str]):
        super().__init__("; ".join(problems))
        self.problems = list(problems)


def _label(idx: int, item: LineItem) -> str:
    return f"Item {idx + 1} ({item.name or item.code or item.product_id or '?'})"


def validate_item(idx: int, item: LineItem) -> List[str]:
    problems: List[str] = []
    label = _label(idx, item)
    if item.is_serialized:
        if not item.serial_numbers:
            problems.append(f"{label}: at least one serial number is required")
    elif item.entered_quantity <= ZERO:
        problems.append(f"{label}: quantity must be greater than 0")
    if item.rate < ZERO:
        problems.append(f"{label}: rate cannot be negative")
    if not ZERO <= item.tax_rate <= HUNDRED:
        problems.append(f"{label}: tax rate must be between 0 and 100")
    if item.discount_value < ZERO:
        problems.append(f"{label}: discount cannot be negative")
    elif (
        item.discount_value_type == DiscountValueType.PERCENTAGE
        and item.discount_value > HUNDRED
    ):
        problems.append(f"{label}: discount percentage cannot exceed 100")
    return problems


def validate_invoice(invoice: Invoice) -> List[str]:
    """Return a list of human readable problems (empty when valid)."""
    problems: List[str] = []
    if not invoice.items:
        problems.append("At least one item is required")
    for idx, item in enumerate(invoice.items):
        problems.extend(validate_item(idx, item))

    if invoice.discount_scope.includes_invoice:
        if invoice.discount_value < ZERO:
            problems.append("Discount value cannot be negative")
        elif (
            invoice.discount_value_type == DiscountValueType.PERCENTAGE
            and invoice.discount_value > HUNDRED
        ):
            problems.append("Invoice discount percentage cannot exceed 100")
    if invoice.transportation_charge < ZERO:
        problems.append("Transportation charge cannot be negative")
    return problems


def ensure_valid(invoice: Invoice) -> Invoice:
    problems = validate_invoice(invoice)
    if problems:
        raise InvoiceValidationError(problems)
    return invoice
