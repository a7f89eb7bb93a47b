from decimal import Decimal

import pytest

from billcalc.constants import ROUNDTRIP_TOLERANCE
from billcalc.rates import to_base, to_inclusive, within_tolerance


def test_zero_tax_is_identity():
    assert to_base(Decimal("118"), 0) == Decimal("118")
    assert to_inclusive(Decimal("118"), Decimal("0")) == Decimal("118")


def test_to_base_strips_tax():
    assert to_base(Decimal("118"), Decimal("18")) == Decimal("100")
    assert to_inclusive(Decimal("100"), Decimal("18")) == Decimal("118")


@pytest.mark.parametrize("tax", ["0", "5", "7", "12.5", "18", "28", "100"])
@pytest.mark.parametrize("rate", ["0", "0.01", "33.33", "99.99", "1234.567"])
def test_round_trip_within_tolerance(rate, tax):
    rate = Decimal(rate)
    back = to_inclusive(to_base(rate, Decimal(tax)), Decimal(tax))
    assert within_tolerance(back, rate, ROUNDTRIP_TOLERANCE)


def test_accepts_raw_form_values():
    assert to_base("236,00", "18") == Decimal("200")
    assert to_inclusive(50, 10.0) == Decimal("55")
