"""Update Bill Use Case

Saves edits to an existing bill.
"""

import logging
from libs.result import Result, Return, Error
from billflow.app.services.unit_of_work import UnitOfWork
from billflow.app.repositories.bill_repository import BillRepository
from billflow.domain.bill_draft import BillDraft
from .create_bill import validation_error
from .dtos import BillResponseDTO
from .get_bill import bill_not_found

logger = logging.getLogger(__name__)


class UpdateBill:
    """
    Use Case: Save edits to a bill

    Business Rules:
    1. Same recompute and validation as creation
    2. An empty invoice number keeps the stored one
    3. Drive fields the draft does not carry keep their stored values
    4. Concurrent editors race last-write-wins

    Flow:
    1. Recompute and validate draft
    2. Load existing bill
    3. Merge changes
    4. Commit transaction
    """

    def __init__(self, uow: UnitOfWork, bill_repo: BillRepository):
        self.uow = uow
        self.bill_repo = bill_repo

    async def execute(self, bill_id: str, draft: BillDraft) -> Result[BillResponseDTO]:
        """
        Execute bill update

        Args:
            bill_id: Bill record key
            draft: Edited bill

        Returns:
            Result[BillResponseDTO]: Updated bill, VALIDATION_ERROR,
            BILL_NOT_FOUND or UPDATE_BILL_FAILED
        """
        draft = draft.with_totals()
        errors = draft.validation_errors()
        if errors:
            return Return.err(validation_error(errors))

        try:
            existing = await self.bill_repo.get_by_id(bill_id)
            if existing is None:
                return Return.err(bill_not_found(bill_id))

            changes = draft.to_record()
            if not draft.invoice_no.strip():
                changes.pop("invoice_no")
            for field in ("drive_file_id", "drive_link"):
                if changes.get(field) is None:
                    changes.pop(field)

            updated = await self.bill_repo.update(bill_id, changes)
            if updated is None:
                return Return.err(bill_not_found(bill_id))

            await self.uow.commit()

            logger.info(f"Updated bill {updated.invoice_no}")
            return Return.ok(BillResponseDTO.from_bill(updated))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to update bill {bill_id}: {e}")
            return Return.err(
                Error(
                    code="UPDATE_BILL_FAILED",
                    message="Failed to update bill",
                    reason=str(e),
                )
            )
