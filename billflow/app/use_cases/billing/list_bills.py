"""List Bills Use Case

Lists saved bills filtered by time window and search term.
"""

from datetime import date
from typing import Optional
from libs.result import Result, Return, Error
from billflow.app.repositories.bill_repository import BillRepository
from billflow.domain.bill_filter import FilterOptions
from billflow.domain.bill_query import filter_bills
from .dtos import BillResponseDTO, ListBillsResponseDTO


class ListBills:
    """
    List Bills Use Case

    Business Rules:
    1. Relative windows (1/3/6 months) count back from today
    2. Custom windows are inclusive on both ends; a missing end is open
    3. Search is a case-insensitive substring match on the chosen field
    4. Results are sorted by invoice date, newest first
    """

    def __init__(self, bill_repo: BillRepository):
        self.bill_repo = bill_repo

    async def execute(
        self,
        options: Optional[FilterOptions] = None,
        today: Optional[date] = None,
    ) -> Result[ListBillsResponseDTO]:
        """
        Execute bill listing

        Args:
            options: Filter options (defaults to last 3 months, buyer name)
            today: Reference date for relative windows

        Returns:
            Result[ListBillsResponseDTO]: Matching bills or LIST_BILLS_FAILED
        """
        options = options or FilterOptions()
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

        matching = filter_bills(bills, options, today=today)
        return Return.ok(
            ListBillsResponseDTO(
                bills=[BillResponseDTO.from_bill(bill) for bill in matching],
                total=len(matching),
            )
        )
