"""Enumerations for the invoice settings understood by the engine."""

from __future__ import annotations

from enum import Enum


class _Code(str, Enum):
    """String enum that also accepts legacy spellings via :meth:`parse`."""

    @classmethod
    def _aliases(cls) -> dict[str, str]:
        return {}

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        key = str(value or "").strip().lower()
        key = cls._aliases().get(key, key)
        try:
            return cls(key)
        except ValueError:
            allowed = ", ".join(m.value for m in cls)
            raise ValueError(
                f"Unknown {cls.__name__} {value!r} (expected one of: {allowed})"
            ) from None


class RateType(_Code):
    """Whether an entered unit rate already includes tax."""

    WITH_TAX = "with_tax"
    WITHOUT_TAX = "without_tax"


class DiscountScope(_Code):
    """Where discounts apply on an invoice."""

    NONE = "none"
    PER_ITEM = "per_item"
    INVOICE = "invoice"
    PER_ITEM_AND_INVOICE = "per_item_and_invoice"

    @classmethod
    def _aliases(cls) -> dict[str, str]:
        return {"on_invoice": "invoice", "": "none"}

    @property
    def includes_invoice(self) -> bool:
        return self in (DiscountScope.INVOICE, DiscountScope.PER_ITEM_AND_INVOICE)


class DiscountValueType(_Code):
    """How a discount value is interpreted."""

    PERCENTAGE = "percentage"
    FIXED = "fixed"

    @classmethod
    def _aliases(cls) -> dict[str, str]:
        return {"rupees": "fixed", "amount": "fixed"}
