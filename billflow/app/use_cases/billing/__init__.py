"""Billing domain use cases"""
from .get_new_bill_draft import GetNewBillDraft
from .calculate_bill import CalculateBill
from .create_bill import CreateBill
from .get_bill import GetBill
from .list_bills import ListBills
from .update_bill import UpdateBill
from .delete_bill import DeleteBill
from .get_dashboard import GetDashboard
from .export_bill_pdf import ExportBillPdf
from .export_bills_csv import ExportBillsCsv, render_bills_csv
from .dtos import (
    BillEditDTO,
    CalculateBillCommandDTO,
    BillResponseDTO,
    ListBillsResponseDTO,
    DeleteBillResponseDTO,
    PdfExportDTO,
    CsvExportDTO,
)

__all__ = [
    "GetNewBillDraft",
    "CalculateBill",
    "CreateBill",
    "GetBill",
    "ListBills",
    "UpdateBill",
    "DeleteBill",
    "GetDashboard",
    "ExportBillPdf",
    "ExportBillsCsv",
    "render_bills_csv",
    "BillEditDTO",
    "CalculateBillCommandDTO",
    "BillResponseDTO",
    "ListBillsResponseDTO",
    "DeleteBillResponseDTO",
    "PdfExportDTO",
    "CsvExportDTO",
]
