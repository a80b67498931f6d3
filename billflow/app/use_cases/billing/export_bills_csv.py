"""Export Bills CSV Use Case

Full CSV backup of every saved bill.
"""

import csv
import io
from datetime import date
from typing import Any, Iterable, Optional
from libs.result import Result, Return, Error
from billflow.app.repositories.bill_repository import BillRepository
from billflow.app.services.drive_service import drive_view_link
from .dtos import CsvExportDTO

CSV_HEADER = ["Invoice No", "Date", "Buyer", "GSTIN", "Total", "Status", "Drive Link"]


def backup_filename(day: date) -> str:
    return f"billflow_backup_{day.isoformat()}.csv"


def _drive_link(bill: Any) -> str:
    if bill.drive_link:
        return bill.drive_link
    return drive_view_link(bill.drive_file_id)


def render_bills_csv(bills: Iterable[Any]) -> str:
    """
    CSV backup text

    The header line is unquoted; every data row is fully quoted. Rows are
    joined with "\\n".
    """
    buffer = io.StringIO()
    buffer.write(",".join(CSV_HEADER) + "\n")

    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for bill in bills:
        status = bill.status.value if hasattr(bill.status, "value") else bill.status
        writer.writerow(
            [
                bill.invoice_no,
                bill.invoice_date.isoformat(),
                bill.buyer_name,
                bill.buyer_gstin or "",
                f"{bill.grand_total}",
                status,
                _drive_link(bill),
            ]
        )

    return buffer.getvalue()


class ExportBillsCsv:
    """
    Export Bills CSV Use Case

    Business Rules:
    1. Every bill is exported, most recently created first
    2. Drive Link is the stored link, or a view link built from the file id
    3. The export is a backup only; it is not re-importable
    """

    def __init__(self, bill_repo: BillRepository):
        self.bill_repo = bill_repo

    async def execute(self, today: Optional[date] = None) -> Result[CsvExportDTO]:
        """
        Execute CSV export

        Args:
            today: Date used in the file name (defaults to today)

        Returns:
            Result[CsvExportDTO]: CSV content or LIST_BILLS_FAILED
        """
        try:
            bills = await self.bill_repo.list_all()
        except Exception as e:
            return Return.err(
                Error(
                    code="LIST_BILLS_FAILED",
                    message="Failed to load bills",
                    reason=str(e),
                )
            )

        return Return.ok(
            CsvExportDTO(
                filename=backup_filename(today or date.today()),
                content=render_bills_csv(bills),
                row_count=len(bills),
            )
        )
