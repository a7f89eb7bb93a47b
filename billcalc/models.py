from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Tuple

from billcalc.codes import DiscountScope, DiscountValueType, RateType
from billcalc.constants import DEFAULT_RATE_TYPE
from billcalc.money import ZERO, to_dec
from billcalc.tax_types import nominal_rate


@dataclass
class LineItem:
    """One product row of an invoice.

    For serialized products ``quantity`` is derived from the serial numbers
    and cannot be assigned; ``entered_quantity`` keeps whatever the user typed
    before the product turned out to be serialized.
    """

    product_id: str | None = None
    name: str = ""
    code: str = ""
    entered_quantity: Decimal = ZERO
    is_serialized: bool = False
    serial_numbers: Tuple[str, ...] = ()
    rate: Decimal = ZERO
    rate_type: RateType = field(
        default_factory=lambda: RateType.parse(DEFAULT_RATE_TYPE)
    )
    tax_rate: Decimal = ZERO
    discount_value_type: DiscountValueType = DiscountValueType.PERCENTAGE
    discount_value: Decimal = ZERO

    def __post_init__(self) -> None:
        self.entered_quantity = to_dec(self.entered_quantity)
        self.rate = to_dec(self.rate)
        self.tax_rate = to_dec(self.tax_rate)
        self.discount_value = to_dec(self.discount_value)
        self.rate_type = RateType.parse(self.rate_type)
        self.discount_value_type = DiscountValueType.parse(self.discount_value_type)
        self.serial_numbers = tuple(
            dict.fromkeys(
                str(s).strip()
                for s in (self.serial_numbers or ())
                if s is not None and str(s).strip()
            )
        )

    @property
    def quantity(self) -> Decimal:
        if self.is_serialized:
            return Decimal(len(self.serial_numbers))
        return self.entered_quantity

    @quantity.setter
    def quantity(self, value) -> None:
        if self.is_serialized:
            raise ValueError(
                "Quantity of a serialized item follows its serial numbers"
            )
        self.entered_quantity = to_dec(value)

    def add_serial(self, serial: str) -> bool:
        """Append ``serial``; return ``False`` when blank or already present."""
        serial = str(serial or "").strip()
        if not serial or serial in self.serial_numbers:
            return False
        self.serial_numbers = self.serial_numbers + (serial,)
        return True

    def remove_serial(self, serial: str) -> bool:
        if serial not in self.serial_numbers:
            return False
        self.serial_numbers = tuple(s for s in self.serial_numbers if s != serial)
        return True


@dataclass(frozen=True)
class ItemFigures:
    """Computed figures of one line item (unrounded)."""

    quantity: Decimal
    rate_without_tax: Decimal
    rate_with_tax: Decimal
    subtotal: Decimal
    discount_amount: Decimal
    taxable_base: Decimal
    tax_amount: Decimal
    total: Decimal


@dataclass
class Invoice:
    tax_type: object = "no_tax"
    rate_type: RateType = field(
        default_factory=lambda: RateType.parse(DEFAULT_RATE_TYPE)
    )
    discount_scope: DiscountScope = DiscountScope.NONE
    discount_value_type: DiscountValueType = DiscountValueType.PERCENTAGE
    discount_value: Decimal = ZERO
    transportation_charge: Decimal = ZERO
    round_off: Decimal = ZERO
    items: List[LineItem] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.rate_type = RateType.parse(self.rate_type)
        self.discount_scope = DiscountScope.parse(self.discount_scope)
        self.discount_value_type = DiscountValueType.parse(self.discount_value_type)
        self.discount_value = to_dec(self.discount_value)
        self.transportation_charge = to_dec(self.transportation_charge)
        self.round_off = to_dec(self.round_off)
        self.items = list(self.items)

    @property
    def nominal_tax_rate(self) -> Decimal:
        return nominal_rate(self.tax_type)

    @property
    def tax_enabled(self) -> bool:
        return self.nominal_tax_rate > 0

    def new_item(self, **fields) -> LineItem:
        """Create an item inheriting the invoice rate type and append it."""
        fields.setdefault("rate_type", self.rate_type)
        item = LineItem(**fields)
        self.items.append(item)
        return item

    def change_rate_type(self, new_rate_type) -> None:
        """Switch the invoice rate type and re-express existing item rates."""
        from billcalc.migrator import migrate_rate_type

        new_rate_type = RateType.parse(new_rate_type)
        self.items[:] = migrate_rate_type(
            self.items, self.rate_type, new_rate_type, tax_enabled=self.tax_enabled
        )
        self.rate_type = new_rate_type


@dataclass(frozen=True)
class InvoiceTotals:
    items: Tuple[ItemFigures, ...]
    basic_amount: Decimal
    item_level_discount_total: Decimal
    item_totals_sum: Decimal
    invoice_level_discount: Decimal
    total_discount: Decimal
    tax_amount: Decimal
    transportation_charge: Decimal
    round_off: Decimal
    net_payable: Decimal
