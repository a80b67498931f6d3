"""Export Bill PDF Use Case

Renders a bill's tax invoice and syncs the PDF to Drive.
"""

import logging
from libs.result import Result, Return, Error
from billflow.app.services.unit_of_work import UnitOfWork
from billflow.app.services.pdf_service import PdfService
from billflow.app.services.drive_service import DriveSyncError, DriveSyncService
from billflow.app.repositories.bill_repository import BillRepository
from billflow.domain.company import CompanyProfile
from .dtos import PdfExportDTO
from .get_bill import bill_not_found

logger = logging.getLogger(__name__)


class ExportBillPdf:
    """
    Use Case: Export a bill as PDF

    Business Rules:
    1. Rendering and syncing fail independently; a sync failure never
       discards the rendered PDF
    2. A previously synced bill overwrites its existing Drive file
    3. A successful sync stores the Drive file id and link on the bill
    4. Failing to store the link is logged and the PDF is still returned

    Flow:
    1. Load bill
    2. Render PDF
    3. Upload to Drive
    4. Store Drive reference and commit
    5. Return PDF with sync outcome
    """

    def __init__(
        self,
        uow: UnitOfWork,
        bill_repo: BillRepository,
        pdf_service: PdfService,
        drive_service: DriveSyncService,
        company: CompanyProfile,
    ):
        self.uow = uow
        self.bill_repo = bill_repo
        self.pdf_service = pdf_service
        self.drive_service = drive_service
        self.company = company

    async def execute(self, bill_id: str) -> Result[PdfExportDTO]:
        """
        Execute PDF export

        Args:
            bill_id: Bill record key

        Returns:
            Result[PdfExportDTO]: PDF with sync status, BILL_NOT_FOUND or
            EXPORT_PDF_FAILED
        """
        # Step 1: Load bill
        bill = await self.bill_repo.get_by_id(bill_id)
        if bill is None:
            return Return.err(bill_not_found(bill_id))

        # Step 2: Render PDF
        try:
            pdf_bytes = self.pdf_service.render_tax_invoice(bill, self.company)
        except Exception as e:
            logger.error(f"Failed to render PDF for bill {bill.invoice_no}: {e}")
            return Return.err(
                Error(
                    code="EXPORT_PDF_FAILED",
                    message="Failed to generate PDF",
                    reason=str(e),
                )
            )

        export = PdfExportDTO(
            bill_id=bill.id,
            invoice_no=bill.invoice_no,
            filename=f"invoice_{bill.invoice_no}.pdf",
            pdf_bytes=pdf_bytes,
            sync_status="skipped",
            drive_file_id=bill.drive_file_id,
            drive_link=bill.drive_link,
        )

        # Step 3: Upload to Drive
        try:
            upload = await self.drive_service.upload_pdf(
                bill.invoice_no,
                pdf_bytes,
                bill.invoice_date,
                existing_file_id=bill.drive_file_id,
            )
        except DriveSyncError as e:
            logger.warning(f"PDF for bill {bill.invoice_no} generated but Drive sync failed: {e}")
            export.sync_status = "failed"
            export.sync_error = str(e)
            return Return.ok(export)

        if not upload.synced:
            return Return.ok(export)

        export.sync_status = "synced"
        export.drive_file_id = upload.file_id
        export.drive_link = upload.link

        # Step 4: Store Drive reference
        try:
            await self.bill_repo.update(
                bill.id, {"drive_file_id": upload.file_id, "drive_link": upload.link}
            )
            await self.uow.commit()
        except Exception as e:
            await self.uow.rollback()
            logger.warning(f"Bill {bill.invoice_no} synced but its Drive link was not saved: {e}")
            export.sync_error = f"Drive link not saved: {e}"

        return Return.ok(export)
