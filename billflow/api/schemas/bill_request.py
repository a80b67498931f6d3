"""Request schemas for Bill API

Pydantic models for validating incoming HTTP requests.
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from billflow.app.use_cases.billing.dtos import BillEditDTO
from billflow.domain.bill import BillItem
from billflow.domain.bill_draft import BillDraft, MAX_TAX_RATE


class BillItemRequestSchema(BaseModel):
    """
    Request schema for one invoice line

    Amount is not accepted; it is always derived from quantity and rate.
    """

    description: str = Field(default="", description="Item description")
    hsn_code: str = Field(default="", max_length=20, description="HSN code")
    quantity: Decimal = Field(default=Decimal("0"), ge=0, description="Quantity (>= 0)")
    rate: Decimal = Field(default=Decimal("0"), ge=0, description="Rate per unit (>= 0)")


class BillRequestSchema(BaseModel):
    """
    Request schema for creating or updating a bill

    Used for POST /bills, PUT /bills/{id} and POST /bills/calculate.
    Derived totals are recomputed server-side and never read from the
    request.
    """

    invoice_no: str = Field(
        default="",
        max_length=20,
        description="Invoice number (empty = next number of the invoice year)"
    )
    invoice_date: Optional[date] = Field(default=None, description="Invoice date")
    buyer_name: str = Field(default="", max_length=255, description="Buyer name")
    buyer_address: str = Field(default="", description="Buyer address")
    buyer_gstin: str = Field(default="", max_length=15, description="Buyer GSTIN (optional)")
    po_no: str = Field(default="", max_length=100)
    po_date: Optional[date] = None
    dc_no: str = Field(default="", max_length=100)
    dc_date: Optional[date] = None
    mode_of_transport: str = Field(default="", max_length=100)
    items: List[BillItemRequestSchema] = Field(
        default_factory=lambda: [BillItemRequestSchema()],
        description="Invoice lines"
    )
    sgst_rate: Decimal = Field(default=Decimal("9"), ge=0, le=MAX_TAX_RATE, decimal_places=2)
    cgst_rate: Decimal = Field(default=Decimal("9"), ge=0, le=MAX_TAX_RATE, decimal_places=2)
    igst_rate: Decimal = Field(default=Decimal("0"), ge=0, le=MAX_TAX_RATE, decimal_places=2)

    @field_validator("buyer_gstin", mode="before")
    @classmethod
    def normalize_gstin(cls, v):
        """GSTINs are upper case; stripped before the length check"""
        if isinstance(v, str):
            return v.strip().upper()
        return v

    def to_draft(self) -> BillDraft:
        """Draft with items numbered 1..n and totals recomputed"""
        items = [
            BillItem(sno=number, **item.model_dump())
            for number, item in enumerate(self.items, start=1)
        ]
        draft = BillDraft(
            **self.model_dump(exclude={"items"}),
            items=items or [BillItem(sno=1)],
        )
        return draft.with_totals()

    class Config:
        json_schema_extra = {
            "example": {
                "invoice_date": "2025-03-14",
                "buyer_name": "Acme Engineering Works",
                "buyer_address": "12, Industrial Estate, Ambattur, Chennai",
                "buyer_gstin": "33AAAAA0000A1Z5",
                "po_no": "PO-118",
                "po_date": "2025-03-01",
                "dc_no": "DC-42",
                "dc_date": "2025-03-14",
                "mode_of_transport": "Road",
                "items": [
                    {
                        "description": "PU Roller 50mm",
                        "hsn_code": "3926",
                        "quantity": "10",
                        "rate": "150.00",
                    }
                ],
                "sgst_rate": "9",
                "cgst_rate": "9",
                "igst_rate": "0",
            }
        }


class CalculateBillRequestSchema(BaseModel):
    """
    Request schema for POST /bills/calculate

    The optional edit is applied after the draft is recomputed.
    """

    bill: BillRequestSchema
    edit: Optional[BillEditDTO] = None
