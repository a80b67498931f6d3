"""SQLAlchemy Bill Repository Implementation

Implements bill persistence using SQLAlchemy async session.
"""

from typing import Any, Dict, List, Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from billflow.app.repositories.bill_repository import BillRepository
from billflow.domain.bill import Bill
from billflow.domain.base import utc_now

# Columns a caller may never overwrite through update()
_PROTECTED_FIELDS = {"id", "created_at", "updated_at"}


class SqlAlchemyBillRepository(BillRepository):
    """
    SQLAlchemy implementation of BillRepository

    Uses async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_all(self) -> List[Bill]:
        """
        Retrieve every bill

        Returns:
            All bills, most recently created first
        """
        statement = select(Bill).order_by(Bill.created_at.desc())
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def get_by_id(self, bill_id: str) -> Optional[Bill]:
        """
        Retrieve bill by ID

        Args:
            bill_id: Bill record key

        Returns:
            Bill if found, None otherwise
        """
        statement = select(Bill).where(Bill.id == bill_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def create(self, bill: Bill) -> Bill:
        """
        Create a new bill

        Args:
            bill: Bill entity to persist

        Returns:
            Created Bill with record key and timestamps assigned
        """
        now = utc_now()
        bill.created_at = now
        bill.updated_at = now
        self.session.add(bill)
        await self.session.flush()
        await self.session.refresh(bill)
        return bill

    async def update(self, bill_id: str, changes: Dict[str, Any]) -> Optional[Bill]:
        """
        Merge changes into an existing bill

        Args:
            bill_id: Bill record key
            changes: Field name -> new value (id and timestamps are ignored)

        Returns:
            Updated Bill, None if it does not exist
        """
        bill = await self.get_by_id(bill_id)
        if bill is None:
            return None

        for field, value in changes.items():
            if field in _PROTECTED_FIELDS:
                continue
            setattr(bill, field, value)

        bill.updated_at = utc_now()
        self.session.add(bill)
        await self.session.flush()
        await self.session.refresh(bill)
        return bill

    async def delete(self, bill_id: str) -> bool:
        """
        Delete a bill

        Args:
            bill_id: Bill record key

        Returns:
            True if a bill was deleted, False if it did not exist
        """
        bill = await self.get_by_id(bill_id)
        if bill is None:
            return False

        await self.session.delete(bill)
        await self.session.flush()
        return True

    async def list_invoice_numbers(self, prefix: str) -> List[str]:
        """
        Invoice numbers starting with prefix

        Args:
            prefix: Invoice number prefix (e.g., SC2025)

        Returns:
            Matching invoice numbers
        """
        statement = select(Bill.invoice_no).where(Bill.invoice_no.like(f"{prefix}%"))
        result = await self.session.execute(statement)
        return list(result.scalars().all())
