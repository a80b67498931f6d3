"""Delete Bill Use Case

Deletes a bill and, when it was synced, its Drive copy.
"""

import logging
from typing import Optional
from libs.result import Result, Return, Error
from billflow.app.services.unit_of_work import UnitOfWork
from billflow.app.services.drive_service import DriveSyncError, DriveSyncService
from billflow.app.repositories.bill_repository import BillRepository
from .dtos import DeleteBillResponseDTO
from .get_bill import bill_not_found

logger = logging.getLogger(__name__)


class DeleteBill:
    """
    Use Case: Delete a bill

    Business Rules:
    1. The record delete is committed before the Drive copy is touched
    2. Removing the Drive copy is best effort; failure is logged only
    """

    def __init__(
        self,
        uow: UnitOfWork,
        bill_repo: BillRepository,
        drive_service: Optional[DriveSyncService] = None,
    ):
        self.uow = uow
        self.bill_repo = bill_repo
        self.drive_service = drive_service

    async def execute(self, bill_id: str) -> Result[DeleteBillResponseDTO]:
        """
        Execute bill deletion

        Args:
            bill_id: Bill record key

        Returns:
            Result[DeleteBillResponseDTO]: Deletion outcome, BILL_NOT_FOUND
            or DELETE_BILL_FAILED
        """
        try:
            bill = await self.bill_repo.get_by_id(bill_id)
            if bill is None:
                return Return.err(bill_not_found(bill_id))

            invoice_no = bill.invoice_no
            drive_file_id = bill.drive_file_id

            await self.bill_repo.delete(bill_id)
            await self.uow.commit()
        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to delete bill {bill_id}: {e}")
            return Return.err(
                Error(
                    code="DELETE_BILL_FAILED",
                    message="Failed to delete bill",
                    reason=str(e),
                )
            )

        drive_file_deleted = False
        if drive_file_id and self.drive_service is not None:
            try:
                await self.drive_service.delete_file(drive_file_id)
                drive_file_deleted = True
            except DriveSyncError as e:
                logger.warning(f"Bill {invoice_no} deleted but Drive file {drive_file_id} was kept: {e}")

        logger.info(f"Deleted bill {invoice_no}")
        return Return.ok(
            DeleteBillResponseDTO(
                bill_id=bill_id,
                invoice_no=invoice_no,
                drive_file_deleted=drive_file_deleted,
            )
        )
