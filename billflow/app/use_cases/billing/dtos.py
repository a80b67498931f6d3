"""Data Transfer Objects for Billing Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, Field

from billflow.domain.bill import Bill, BillItem
from billflow.domain.bill_draft import BillDraft


class BillEditDTO(BaseModel):
    """
    One edit applied to a draft before recalculation

    Used as input to CalculateBill alongside the draft.
    """

    action: Literal["update_item", "add_item", "remove_item", "set_tax_rate"] = Field(
        ...,
        description="Edit to apply"
    )

    index: Optional[int] = Field(
        default=None,
        ge=0,
        description="Item position (update_item, remove_item)"
    )

    changes: Dict[str, Any] = Field(
        default_factory=dict,
        description="Item fields to change (update_item)"
    )

    field: Optional[Literal["sgst_rate", "cgst_rate", "igst_rate"]] = Field(
        default=None,
        description="Tax rate to change (set_tax_rate)"
    )

    value: Optional[Decimal] = Field(
        default=None,
        decimal_places=2,
        description="New tax rate in percent (set_tax_rate)"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "action": "update_item",
                "index": 0,
                "changes": {"quantity": "10", "rate": "150.00"},
            }
        }


class CalculateBillCommandDTO(BaseModel):
    """
    Command DTO for recalculating a draft

    Used as input to CalculateBill use case.
    """

    draft: BillDraft = Field(
        ...,
        description="Draft being edited"
    )

    edit: Optional[BillEditDTO] = Field(
        default=None,
        description="Optional edit to apply before recalculating"
    )


class BillResponseDTO(BaseModel):
    """
    Response DTO for a saved bill

    Returned by create, get, update and list operations.
    """

    id: str
    invoice_no: str
    invoice_date: date
    buyer_name: str
    buyer_address: str
    buyer_gstin: str
    po_no: str
    po_date: Optional[date] = None
    dc_no: str
    dc_date: Optional[date] = None
    mode_of_transport: str
    items: List[BillItem]
    subtotal: Decimal
    sgst_rate: Decimal
    sgst_amount: Decimal
    cgst_rate: Decimal
    cgst_amount: Decimal
    igst_rate: Decimal
    igst_amount: Decimal
    grand_total: Decimal
    amount_in_words: str
    status: str
    drive_file_id: Optional[str] = None
    drive_link: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_bill(cls, bill: Bill) -> "BillResponseDTO":
        return cls(
            id=bill.id,
            invoice_no=bill.invoice_no,
            invoice_date=bill.invoice_date,
            buyer_name=bill.buyer_name,
            buyer_address=bill.buyer_address,
            buyer_gstin=bill.buyer_gstin,
            po_no=bill.po_no,
            po_date=bill.po_date,
            dc_no=bill.dc_no,
            dc_date=bill.dc_date,
            mode_of_transport=bill.mode_of_transport,
            items=bill.line_items,
            subtotal=bill.subtotal,
            sgst_rate=bill.sgst_rate,
            sgst_amount=bill.sgst_amount,
            cgst_rate=bill.cgst_rate,
            cgst_amount=bill.cgst_amount,
            igst_rate=bill.igst_rate,
            igst_amount=bill.igst_amount,
            grand_total=bill.grand_total,
            amount_in_words=bill.amount_in_words,
            status=bill.status.value if hasattr(bill.status, "value") else bill.status,
            drive_file_id=bill.drive_file_id,
            drive_link=bill.drive_link,
            created_at=bill.created_at,
            updated_at=bill.updated_at,
        )

    class Config:
        json_schema_extra = {
            "example": {
                "id": "5f0c3e7b9a2d4c6e8f1a2b3c4d5e6f70",
                "invoice_no": "SC20250007",
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
                        "sno": 1,
                        "description": "PU Roller 50mm",
                        "hsn_code": "3926",
                        "quantity": "10",
                        "rate": "150.00",
                        "amount": "1500.00",
                    }
                ],
                "subtotal": "1500.00",
                "sgst_rate": "9",
                "sgst_amount": "135.00",
                "cgst_rate": "9",
                "cgst_amount": "135.00",
                "igst_rate": "0",
                "igst_amount": "0.00",
                "grand_total": "1770.00",
                "amount_in_words": "One Thousand Seven Hundred Seventy Rupees Only",
                "status": "final",
                "drive_file_id": None,
                "drive_link": None,
                "created_at": "2025-03-14T10:30:00Z",
                "updated_at": "2025-03-14T10:30:00Z",
            }
        }


class ListBillsResponseDTO(BaseModel):
    """
    Response DTO for the filtered bill list

    Bills are sorted newest invoice date first.
    """

    bills: List[BillResponseDTO]
    total: int = Field(..., ge=0, description="Number of matching bills")


class DeleteBillResponseDTO(BaseModel):
    """Response DTO for bill deletion"""

    bill_id: str
    invoice_no: str
    drive_file_deleted: bool = Field(
        default=False,
        description="True when the synced Drive copy was removed as well"
    )


class PdfExportDTO(BaseModel):
    """
    Response DTO for PDF export

    sync_status is "synced", "skipped" (sync not configured) or "failed".
    A failed sync still carries the rendered PDF.
    """

    bill_id: str
    invoice_no: str
    filename: str
    pdf_bytes: bytes
    sync_status: Literal["synced", "skipped", "failed"]
    sync_error: Optional[str] = None
    drive_file_id: Optional[str] = None
    drive_link: Optional[str] = None


class CsvExportDTO(BaseModel):
    """Response DTO for the CSV backup of all bills"""

    filename: str
    content: str
    row_count: int = Field(..., ge=0)
