"""Dashboard API Routes"""

from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from billflow.app.use_cases.billing import GetDashboard
from billflow.adapter.repositories.bill_repository import SqlAlchemyBillRepository
from billflow.domain.dashboard import DashboardStats
from billflow.depends import get_session
from billflow.api.error import ClientError

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("", response_model=DashboardStats)
async def get_dashboard(session: AsyncSession = Depends(get_session)):
    """
    Revenue, bill count, GST collected, last 6 months of revenue and the
    top 5 customers across all bills.
    """
    result = await GetDashboard(SqlAlchemyBillRepository(session)).execute()
    if result.is_err():
        raise ClientError(result.error, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)
    return result.value
