"""Get Dashboard Use Case

Aggregates every saved bill into dashboard statistics.
"""

from libs.result import Result, Return, Error
from billflow.app.repositories.bill_repository import BillRepository
from billflow.domain.bill_query import aggregate_dashboard
from billflow.domain.dashboard import DashboardStats


class GetDashboard:
    """
    Get Dashboard Use Case

    Business Rules:
    1. Totals cover all bills, with no date window
    2. Monthly revenue keeps the latest 6 months that have bills
    3. Top customers are the 5 highest buyers by grand total
    """

    def __init__(self, bill_repo: BillRepository):
        self.bill_repo = bill_repo

    async def execute(self) -> Result[DashboardStats]:
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
        return Return.ok(aggregate_dashboard(bills))
