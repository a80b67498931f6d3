"""Bill Domain Entity

A GST tax invoice issued by the company, with its line items.
"""

from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import BaseModel as PydanticModel, Field as PydanticField
from sqlmodel import Field, Column
from sqlalchemy import JSON, Date, DateTime, Numeric, String, Text
from billflow.domain.base import BaseModel, generate_uuid, utc_now
from billflow.domain.invoice_math import compute_item_amount


class BillStatus(str, Enum):
    """Bill status types"""
    FINAL = "final"  # Every saved bill is final


class BillItem(PydanticModel):
    """
    Bill Item - One invoice line

    Domain Rules:
    - sno is 1-based and contiguous within a bill
    - quantity and rate are non-negative
    - amount = round(quantity * rate, 2), recomputed after every edit
    """

    sno: int = 1
    description: str = ""
    hsn_code: str = ""
    quantity: Decimal = PydanticField(default=Decimal("0"), ge=0)
    rate: Decimal = PydanticField(default=Decimal("0.00"), ge=0)
    amount: Decimal = Decimal("0.00")

    def with_amount(self) -> "BillItem":
        """Copy of this item with amount recomputed from quantity and rate"""
        return self.model_copy(update={"amount": compute_item_amount(self.quantity, self.rate)})

    class Config:
        json_schema_extra = {
            "example": {
                "sno": 1,
                "description": "PU Roller 50mm",
                "hsn_code": "3926",
                "quantity": "10",
                "rate": "150.00",
                "amount": "1500.00",
            }
        }


class Bill(BaseModel, table=True):
    """
    Bill - GST tax invoice

    Domain Rules:
    - invoice_no is unique (SC<year><4-digit sequence>)
    - subtotal = sum of item amounts
    - each tax amount = round(subtotal * rate / 100, 2)
    - grand_total = subtotal + sgst_amount + cgst_amount + igst_amount
    - amount_in_words is the word form of grand_total
    - id is the record key only, never part of the stored document
    """

    __tablename__ = "bills"

    id: str = Field(
        default_factory=generate_uuid,
        sa_column=Column(String(32), primary_key=True),
        description="Record key"
    )

    invoice_no: str = Field(
        sa_column=Column(String(20), nullable=False, unique=True),
        description="Invoice number (e.g., SC20250007)"
    )

    invoice_date: date = Field(
        sa_column=Column(Date, nullable=False, index=True),
        description="Invoice date"
    )

    # Buyer details
    buyer_name: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Buyer (customer) name"
    )

    buyer_address: str = Field(
        default="",
        sa_column=Column(Text, nullable=False, default=""),
        description="Buyer address"
    )

    buyer_gstin: str = Field(
        default="",
        sa_column=Column(String(15), nullable=False, default=""),
        description="Buyer GSTIN (may be empty for unregistered buyers)"
    )

    po_no: str = Field(
        default="",
        sa_column=Column(String(100), nullable=False, default=""),
        description="Buyer purchase order number"
    )

    po_date: Optional[date] = Field(
        default=None,
        sa_column=Column(Date, nullable=True),
        description="Purchase order date"
    )

    # Delivery details
    dc_no: str = Field(
        default="",
        sa_column=Column(String(100), nullable=False, default=""),
        description="Delivery challan number"
    )

    dc_date: Optional[date] = Field(
        default=None,
        sa_column=Column(Date, nullable=True),
        description="Delivery challan date"
    )

    mode_of_transport: str = Field(
        default="",
        sa_column=Column(String(100), nullable=False, default=""),
        description="Mode of transport"
    )

    items: List[Dict[str, Any]] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
        description="Line items (serialised BillItem dicts, in sno order)"
    )

    # Calculations
    subtotal: Decimal = Field(
        default=Decimal("0.00"),
        sa_column=Column(Numeric(14, 2), nullable=False),
        description="Sum of item amounts"
    )

    sgst_rate: Decimal = Field(
        default=Decimal("9"),
        sa_column=Column(Numeric(5, 2), nullable=False),
        description="SGST rate in percent"
    )

    sgst_amount: Decimal = Field(
        default=Decimal("0.00"),
        sa_column=Column(Numeric(14, 2), nullable=False),
        description="SGST amount"
    )

    cgst_rate: Decimal = Field(
        default=Decimal("9"),
        sa_column=Column(Numeric(5, 2), nullable=False),
        description="CGST rate in percent"
    )

    cgst_amount: Decimal = Field(
        default=Decimal("0.00"),
        sa_column=Column(Numeric(14, 2), nullable=False),
        description="CGST amount"
    )

    igst_rate: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(5, 2), nullable=False),
        description="IGST rate in percent"
    )

    igst_amount: Decimal = Field(
        default=Decimal("0.00"),
        sa_column=Column(Numeric(14, 2), nullable=False),
        description="IGST amount"
    )

    grand_total: Decimal = Field(
        default=Decimal("0.00"),
        sa_column=Column(Numeric(14, 2), nullable=False),
        description="Subtotal plus all taxes"
    )

    amount_in_words: str = Field(
        default="",
        sa_column=Column(Text, nullable=False, default=""),
        description="Grand total in words (Indian numbering)"
    )

    # Metadata
    status: BillStatus = Field(
        default=BillStatus.FINAL,
        description="Bill status (always final once saved)"
    )

    drive_file_id: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="Google Drive file ID of the synced PDF"
    )

    drive_link: Optional[str] = Field(
        default=None,
        sa_column=Column(String(512), nullable=True),
        description="Shareable link to the synced PDF"
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Bill creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Last update timestamp"
    )

    @property
    def line_items(self) -> List[BillItem]:
        """Items parsed into BillItem models"""
        return [BillItem.model_validate(item) for item in self.items or []]
