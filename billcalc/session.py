"""Edit-session tracking of whether a persisted total can still be shown.

A reopened invoice first displays the total stored with it (``Trusting``).
The first mutating event switches the session to ``Live`` and from then on
every total is recomputed; a session never goes back to ``Trusting``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from decimal import Decimal

from billcalc.aggregator import aggregate
from billcalc.models import Invoice, InvoiceTotals, LineItem
from billcalc.money import to_dec

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Trusting:
    persisted_total: Decimal


@dataclass(frozen=True)
class Live:
    pass


LIVE = Live()


class EditSession:
    def __init__(self, invoice: Invoice, persisted_net_payable=None):
        self.invoice = invoice
        if persisted_net_payable is None:
            self.state = LIVE
        else:
            self.state = Trusting(to_dec(persisted_net_payable))

    @property
    def is_live(self) -> bool:
        return isinstance(self.state, Live)

    def touch(self) -> None:
        """Record a mutating input event."""
        if not self.is_live:
            log.debug(
                "Dropping persisted total %s, recomputing live",
                self.state.persisted_total,
            )
            self.state = LIVE

    @property
    def net_payable(self) -> Decimal:
        if isinstance(self.state, Trusting):
            return self.state.persisted_total
        return aggregate(self.invoice).net_payable

    def totals(self) -> InvoiceTotals:
        return aggregate(self.invoice)

    # -- mutating events ------------------------------------------------
    def update_invoice(self, **fields) -> None:
        """Apply invoice-level edits.

        A ``rate_type`` edit goes through :meth:`Invoice.change_rate_type`
        after the other fields, so item rates follow the new rate type under
        the new tax type.
        """
        new_rate_type = fields.pop("rate_type", None)
        invoice = replace(self.invoice, **fields)
        if new_rate_type is not None:
            invoice.change_rate_type(new_rate_type)
        self.touch()
        self.invoice = invoice

    def update_item(self, index: int, **fields) -> LineItem:
        """Replace item ``index`` with an edited copy.

        The edit is built in full before the invoice is touched; a rejected
        edit leaves the current item in place.
        """
        item = self.invoice.items[index]
        has_quantity = "quantity" in fields
        if has_quantity:
            fields["entered_quantity"] = fields.pop("quantity")
        if "serial_numbers" in fields:
            fields["serial_numbers"] = tuple(fields["serial_numbers"] or ())
        updated = replace(item, **fields)
        if has_quantity and updated.is_serialized:
            raise ValueError(
                "Quantity of a serialized item follows its serial numbers"
            )
        self.touch()
        self.invoice.items[index] = updated
        return updated

    def add_item(self, item: LineItem | None = None, **fields) -> LineItem:
        self.touch()
        if item is None:
            return self.invoice.new_item(**fields)
        self.invoice.items.append(item)
        return item

    def remove_item(self, index: int) -> LineItem:
        self.touch()
        return self.invoice.items.pop(index)

    def change_rate_type(self, new_rate_type) -> None:
        self.touch()
        self.invoice.change_rate_type(new_rate_type)
