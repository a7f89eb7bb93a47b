from decimal import Decimal

import pytest

from billcalc.models import Invoice, LineItem
from billcalc.validation import InvoiceValidationError, ensure_valid, validate_invoice


def test_valid_invoice_has_no_problems():
    inv = Invoice(items=[LineItem(name="A", entered_quantity=1, rate=10)])
    assert validate_invoice(inv) == []
    assert ensure_valid(inv) is inv


def test_empty_invoice_requires_item():
    assert validate_invoice(Invoice()) == ["At least one item is required"]


def test_item_problems_are_collected():
    inv = Invoice(
        transportation_charge=Decimal("-1"),
        items=[
            LineItem(name="Zero", entered_quantity=0, rate=10),
            LineItem(name="Serial", is_serialized=True, rate=10),
            LineItem(name="Tax", entered_quantity=1, rate=-1, tax_rate=120),
            LineItem(name="Pct", entered_quantity=1, rate=1, discount_value=101),
        ],
    )
    problems = validate_invoice(inv)
    assert "Item 1 (Zero): quantity must be greater than 0" in problems
    assert "Item 2 (Serial): at least one serial number is required" in problems
    assert "Item 3 (Tax): rate cannot be negative" in problems
    assert "Item 3 (Tax): tax rate must be between 0 and 100" in problems
    assert "Item 4 (Pct): discount percentage cannot exceed 100" in problems
    assert "Transportation charge cannot be negative" in problems


def test_fixed_discount_above_hundred_is_fine():
    inv = Invoice(
        items=[LineItem(entered_quantity=1, rate=500, discount_value_type="fixed",
                        discount_value=150)]
    )
    assert validate_invoice(inv) == []


def test_invoice_discount_checked_only_when_scope_includes_invoice():
    items = [LineItem(entered_quantity=1, rate=10)]
    inv = Invoice(discount_scope="per_item", discount_value=-5, items=items)
    assert validate_invoice(inv) == []
    inv = Invoice(discount_scope="invoice", discount_value=-5, items=items)
    assert validate_invoice(inv) == ["Discount value cannot be negative"]
    inv = Invoice(discount_scope="invoice", discount_value=120, items=items)
    assert validate_invoice(inv) == ["Invoice discount percentage cannot exceed 100"]


def test_ensure_valid_raises_with_problems():
    with pytest.raises(InvoiceValidationError) as exc:
        ensure_valid(Invoice())
    assert exc.value.problems == ["At least one item is required"]
    assert isinstance(exc.value, ValueError)
