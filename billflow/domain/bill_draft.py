"""Bill Draft

The editable form of a bill. Every edit returns a new draft whose derived
fields (item amounts, subtotal, taxes, grand total, amount in words) are
recomputed from the full item list and tax rates.
"""

from datetime import date
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Literal, Optional
from pydantic import BaseModel, Field

from billflow.domain.bill import BillItem, BillStatus
from billflow.domain.exceptions import BillEditError, BillValidationError
from billflow.domain.gstin import is_valid_gstin
from billflow.domain.invoice_math import amount_to_words, recompute_totals, to_decimal
from billflow.domain.invoice_numbering import next_invoice_number

DEFAULT_SGST_RATE = Decimal("9")
DEFAULT_CGST_RATE = Decimal("9")
DEFAULT_IGST_RATE = Decimal("0")
MAX_TAX_RATE = Decimal("28")

TaxRateField = Literal["sgst_rate", "cgst_rate", "igst_rate"]

EDITABLE_ITEM_FIELDS = {"description", "hsn_code", "quantity", "rate"}


def _words_for(grand_total: Decimal) -> str:
    return amount_to_words(grand_total) if grand_total >= 0 else ""


class BillDraft(BaseModel):
    """
    Bill Draft - an invoice being edited

    Domain Rules:
    - At least one item, numbered 1..n
    - Derived fields are always consistent after an edit method
    - Tax rates are percentages between 0 and 28 with at most 2 decimal places
    """

    invoice_no: str = ""
    invoice_date: Optional[date] = None
    buyer_name: str = ""
    buyer_address: str = ""
    buyer_gstin: str = ""
    po_no: str = ""
    po_date: Optional[date] = None
    dc_no: str = ""
    dc_date: Optional[date] = None
    mode_of_transport: str = ""
    items: List[BillItem] = Field(default_factory=lambda: [BillItem(sno=1)])
    subtotal: Decimal = Decimal("0.00")
    sgst_rate: Decimal = Field(default=DEFAULT_SGST_RATE, ge=0, le=MAX_TAX_RATE, decimal_places=2)
    sgst_amount: Decimal = Decimal("0.00")
    cgst_rate: Decimal = Field(default=DEFAULT_CGST_RATE, ge=0, le=MAX_TAX_RATE, decimal_places=2)
    cgst_amount: Decimal = Decimal("0.00")
    igst_rate: Decimal = Field(default=DEFAULT_IGST_RATE, ge=0, le=MAX_TAX_RATE, decimal_places=2)
    igst_amount: Decimal = Decimal("0.00")
    grand_total: Decimal = Decimal("0.00")
    amount_in_words: str = ""
    drive_file_id: Optional[str] = None
    drive_link: Optional[str] = None

    @classmethod
    def new(
        cls,
        existing_invoice_numbers: Iterable[Any] = (),
        today: Optional[date] = None,
    ) -> "BillDraft":
        """
        Start a new invoice

        Args:
            existing_invoice_numbers: Existing bills or invoice numbers
            today: Invoice date (defaults to today)

        Returns:
            Draft with one blank item, 9% SGST, 9% CGST, 0% IGST and the
            next invoice number of the year
        """
        today = today or date.today()
        return cls(
            invoice_no=next_invoice_number(existing_invoice_numbers, today.year),
            invoice_date=today,
        )

    @classmethod
    def from_bill(cls, bill: Any) -> "BillDraft":
        """Editable draft of a saved bill"""
        return cls.model_validate(
            {name: getattr(bill, name) for name in cls.model_fields}
        )

    def _recalculated(self, items: List[BillItem], **updates: Any) -> "BillDraft":
        rates = {
            "sgst_rate": updates.get("sgst_rate", self.sgst_rate),
            "cgst_rate": updates.get("cgst_rate", self.cgst_rate),
            "igst_rate": updates.get("igst_rate", self.igst_rate),
        }
        totals = recompute_totals(items, **rates)
        return self.model_copy(
            update={
                **updates,
                "items": items,
                **totals._asdict(),
                "amount_in_words": _words_for(totals.grand_total),
            }
        )

    def with_totals(self) -> "BillDraft":
        """Recompute every item amount and all totals"""
        return self._recalculated([item.with_amount() for item in self.items])

    def update_item(self, index: int, **changes: Any) -> "BillDraft":
        """
        Edit one item (description, hsn_code, quantity, rate)

        Raises:
            BillEditError: unknown field or no item at index
        """
        unknown = set(changes) - EDITABLE_ITEM_FIELDS
        if unknown:
            raise BillEditError(f"Item fields cannot be edited: {', '.join(sorted(unknown))}")
        if not 0 <= index < len(self.items):
            raise BillEditError(f"No item at position {index}")

        items = list(self.items)
        merged = {**items[index].model_dump(), **changes}
        items[index] = BillItem.model_validate(merged).with_amount()
        return self._recalculated(items)

    def add_item(self) -> "BillDraft":
        """Append a blank item"""
        items = list(self.items) + [BillItem(sno=len(self.items) + 1)]
        return self._recalculated(items)

    def remove_item(self, index: int) -> "BillDraft":
        """
        Remove an item and renumber the rest 1..n

        Raises:
            BillEditError: it is the only item, or no item at index
        """
        if len(self.items) == 1:
            raise BillEditError("At least one item is required")
        if not 0 <= index < len(self.items):
            raise BillEditError(f"No item at position {index}")

        remaining = [item for position, item in enumerate(self.items) if position != index]
        items = [
            item.model_copy(update={"sno": number})
            for number, item in enumerate(remaining, start=1)
        ]
        return self._recalculated(items)

    def set_tax_rate(self, field: TaxRateField, value: Any) -> "BillDraft":
        """
        Change one tax rate; subtotal and item amounts are unaffected

        Raises:
            BillEditError: unknown rate field, rate outside 0-28 or finer than 0.01
        """
        if field not in ("sgst_rate", "cgst_rate", "igst_rate"):
            raise BillEditError(f"Unknown tax rate field: {field}")
        rate = to_decimal(value)
        if not 0 <= rate <= MAX_TAX_RATE:
            raise BillEditError(f"Tax rate must be between 0 and {MAX_TAX_RATE}")
        if rate != rate.quantize(Decimal("0.01")):
            raise BillEditError("Tax rate may have at most 2 decimal places")
        return self._recalculated(list(self.items), **{field: rate})

    def validation_errors(self) -> Dict[str, str]:
        """
        Pre-save checks

        Returns:
            Field name -> message; empty when the draft can be saved
        """
        errors: Dict[str, str] = {}

        if not self.buyer_name.strip():
            errors["buyer_name"] = "Buyer name is required"
        if not self.invoice_date:
            errors["invoice_date"] = "Invoice date is required"
        if self.buyer_gstin and not is_valid_gstin(self.buyer_gstin):
            errors["buyer_gstin"] = "Invalid GSTIN format"
        if any(not item.description.strip() for item in self.items):
            errors["items"] = "All items must have a description"
        if self.grand_total <= 0:
            errors["total"] = "Total amount must be greater than zero"

        return errors

    def ensure_valid(self) -> "BillDraft":
        """Return self, or raise BillValidationError with the field messages"""
        errors = self.validation_errors()
        if errors:
            raise BillValidationError(errors)
        return self

    def to_record(self) -> Dict[str, Any]:
        """Column values for the Bill entity (status is always final)"""
        record = self.model_dump(exclude={"items"})
        record["items"] = [item.model_dump(mode="json") for item in self.items]
        record["status"] = BillStatus.FINAL
        return record
