from decimal import Decimal

import pytest

from billcalc.codes import RateType
from billcalc.models import Invoice, LineItem
from billcalc.session import EditSession, Live, Trusting


def _invoice():
    return Invoice(items=[LineItem(name="A", entered_quantity=2, rate=50)])


def test_new_invoice_is_live():
    session = EditSession(_invoice())
    assert session.is_live
    assert session.net_payable == Decimal("100")


def test_edit_mode_trusts_persisted_total_until_touched():
    session = EditSession(_invoice(), persisted_net_payable="99.50")
    assert isinstance(session.state, Trusting)
    assert session.net_payable == Decimal("99.50")
    # totals() always recomputes
    assert session.totals().net_payable == Decimal("100")


def test_first_mutation_switches_to_live_for_good():
    session = EditSession(_invoice(), persisted_net_payable="99.50")
    session.update_invoice(transportation_charge=Decimal("10"))
    assert isinstance(session.state, Live)
    assert session.net_payable == Decimal("110")
    session.touch()
    assert session.is_live


def test_update_item_fields_and_quantity():
    session = EditSession(_invoice(), persisted_net_payable=100)
    session.update_item(0, quantity=3, rate=Decimal("20"))
    assert session.is_live
    assert session.net_payable == Decimal("60")


def test_update_item_serials_keeps_quantity_derived():
    inv = Invoice(items=[LineItem(is_serialized=True, serial_numbers=("S1",), rate=10)])
    session = EditSession(inv)
    item = session.update_item(0, serial_numbers=["S1", "S2", "S2", "S3"])
    assert item.serial_numbers == ("S1", "S2", "S3")
    assert session.net_payable == Decimal("30")
    with pytest.raises(ValueError):
        session.update_item(0, quantity=9)


def test_add_and_remove_items():
    session = EditSession(_invoice(), persisted_net_payable=100)
    added = session.add_item(name="B", entered_quantity=1, rate=5)
    assert added.rate_type == session.invoice.rate_type
    assert session.net_payable == Decimal("105")
    removed = session.remove_item(0)
    assert removed.name == "A"
    assert session.net_payable == Decimal("5")


def test_rate_type_change_is_a_mutation():
    inv = Invoice(
        tax_type="local_registered",
        items=[LineItem(entered_quantity=1, rate=100, tax_rate=18)],
    )
    session = EditSession(inv, persisted_net_payable="1")
    session.change_rate_type("with_tax")
    assert session.is_live
    assert session.invoice.items[0].rate == Decimal("118")
    assert session.net_payable == Decimal("118")


def test_rate_type_edit_migrates_items():
    inv = Invoice(
        tax_type="local_registered",
        rate_type="without_tax",
        items=[LineItem(entered_quantity=1, rate=100, tax_rate=18)],
    )
    session = EditSession(inv, persisted_net_payable="118")
    session.update_invoice(rate_type="with_tax", transportation_charge=5)
    item = session.invoice.items[0]
    assert session.invoice.rate_type == RateType.WITH_TAX
    assert item.rate_type == session.invoice.rate_type
    assert item.rate == Decimal("118")
    assert session.net_payable == Decimal("123")


def test_rate_type_edit_uses_new_tax_type():
    inv = Invoice(
        tax_type="local_registered",
        rate_type="without_tax",
        items=[LineItem(entered_quantity=1, rate=100, tax_rate=18)],
    )
    session = EditSession(inv)
    session.update_invoice(tax_type="no_tax", rate_type="with_tax")
    assert session.invoice.items[0].rate == Decimal("100")
    assert session.invoice.items[0].rate_type == RateType.WITH_TAX
    assert session.net_payable == Decimal("100")


def test_rejected_item_edit_leaves_item_untouched():
    inv = _invoice()
    original = inv.items[0]
    session = EditSession(inv, persisted_net_payable="100")
    with pytest.raises(TypeError):
        session.update_item(0, quantity=5, colour="red")
    assert session.invoice.items[0] is original
    assert original.entered_quantity == Decimal("2")
    assert not session.is_live


def test_unserializing_item_accepts_quantity():
    inv = Invoice(items=[LineItem(is_serialized=True, serial_numbers=("S1",), rate=10)])
    session = EditSession(inv)
    item = session.update_item(0, is_serialized=False, quantity=5)
    assert not item.is_serialized
    assert item.quantity == Decimal("5")
    assert session.net_payable == Decimal("50")
