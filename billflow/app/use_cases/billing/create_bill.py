"""Create Bill Use Case

Validates a draft and saves it as a final bill.
"""

import logging
from libs.result import Result, Return, Error
from billflow.app.services.unit_of_work import UnitOfWork
from billflow.app.repositories.bill_repository import BillRepository
from billflow.domain.bill import Bill
from billflow.domain.bill_draft import BillDraft
from billflow.domain.invoice_numbering import invoice_prefix, next_invoice_number
from .dtos import BillResponseDTO

logger = logging.getLogger(__name__)


def validation_error(errors: dict) -> Error:
    return Error(
        code="VALIDATION_ERROR",
        message="Bill validation failed",
        reason="; ".join(errors.values()),
        details=errors,
    )


class CreateBill:
    """
    Use Case: Save a new bill

    Business Rules:
    1. Derived fields are recomputed before validation; client totals are
       never trusted
    2. Nothing is saved while the draft has validation errors
    3. A missing invoice number gets the next number of the invoice year
    4. Saved bills are always final
    5. A duplicate invoice number fails on the unique constraint and the
       caller may retry

    Flow:
    1. Recompute and validate draft
    2. Assign invoice number if absent
    3. Create bill
    4. Commit transaction
    5. Return response
    """

    def __init__(self, uow: UnitOfWork, bill_repo: BillRepository):
        self.uow = uow
        self.bill_repo = bill_repo

    async def execute(self, draft: BillDraft) -> Result[BillResponseDTO]:
        """
        Execute bill creation

        Args:
            draft: Bill draft from the form

        Returns:
            Result[BillResponseDTO]: Saved bill, VALIDATION_ERROR or
            CREATE_BILL_FAILED
        """
        # Step 1: Recompute and validate
        draft = draft.with_totals()
        errors = draft.validation_errors()
        if errors:
            return Return.err(validation_error(errors))

        try:
            # Step 2: Assign invoice number
            if not draft.invoice_no.strip():
                year = draft.invoice_date.year
                numbers = await self.bill_repo.list_invoice_numbers(invoice_prefix(year))
                draft = draft.model_copy(update={"invoice_no": next_invoice_number(numbers, year)})

            # Step 3: Create bill
            created = await self.bill_repo.create(Bill(**draft.to_record()))

            # Step 4: Commit transaction
            await self.uow.commit()

            logger.info(f"Created bill {created.invoice_no} for {created.buyer_name}")
            return Return.ok(BillResponseDTO.from_bill(created))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to create bill {draft.invoice_no}: {e}")
            return Return.err(
                Error(
                    code="CREATE_BILL_FAILED",
                    message="Failed to save bill",
                    reason=str(e),
                )
            )
