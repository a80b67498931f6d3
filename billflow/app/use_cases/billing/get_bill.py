"""Get Bill Use Case

Retrieves one saved bill.
"""

from libs.result import Result, Return, Error
from billflow.app.repositories.bill_repository import BillRepository
from .dtos import BillResponseDTO


def bill_not_found(bill_id: str) -> Error:
    return Error(
        code="BILL_NOT_FOUND",
        message=f"Bill with ID {bill_id} not found",
    )


class GetBill:
    """Read-only lookup of a bill by record key"""

    def __init__(self, bill_repo: BillRepository):
        self.bill_repo = bill_repo

    async def execute(self, bill_id: str) -> Result[BillResponseDTO]:
        bill = await self.bill_repo.get_by_id(bill_id)
        if bill is None:
            return Return.err(bill_not_found(bill_id))
        return Return.ok(BillResponseDTO.from_bill(bill))
