"""Get New Bill Draft Use Case

Prepares a blank draft carrying the next invoice number of the year.
"""

from datetime import date
from typing import Optional
from libs.result import Result, Return, Error
from billflow.app.repositories.bill_repository import BillRepository
from billflow.domain.bill_draft import BillDraft
from billflow.domain.invoice_numbering import invoice_prefix


class GetNewBillDraft:
    """
    Get New Bill Draft Use Case

    Business Rules:
    1. Invoice date defaults to today
    2. Invoice number is the highest sequence of the year plus one
    3. Draft starts with one blank item and 9% SGST, 9% CGST, 0% IGST
    """

    def __init__(self, bill_repo: BillRepository):
        self.bill_repo = bill_repo

    async def execute(self, today: Optional[date] = None) -> Result[BillDraft]:
        """
        Execute draft preparation

        Args:
            today: Invoice date override (defaults to today)

        Returns:
            Result[BillDraft]: Fresh draft or LIST_BILLS_FAILED
        """
        today = today or date.today()
        try:
            numbers = await self.bill_repo.list_invoice_numbers(invoice_prefix(today.year))
        except Exception as e:
            return Return.err(
                Error(
                    code="LIST_BILLS_FAILED",
                    message="Failed to read existing invoice numbers",
                    reason=str(e),
                )
            )

        return Return.ok(BillDraft.new(numbers, today=today))
