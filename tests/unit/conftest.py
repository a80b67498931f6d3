import pytest
from datetime import date, datetime
from decimal import Decimal
from unittest.mock import AsyncMock

from billflow.domain.bill import Bill, BillItem
from billflow.domain.bill_draft import BillDraft


@pytest.fixture
def mock_uow():
    """Unit of work whose commit/rollback can be asserted"""
    uow = AsyncMock()
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow


@pytest.fixture
def mock_bill_repo():
    return AsyncMock()


@pytest.fixture
def valid_draft():
    """Acme bill: 10 x 150.00 at 9% + 9%"""
    return BillDraft(
        invoice_no="SC20250007",
        invoice_date=date(2025, 3, 14),
        buyer_name="Acme Engineering Works",
        buyer_address="12, Industrial Estate, Ambattur, Chennai",
        buyer_gstin="33AAAAA0000A1Z5",
        items=[BillItem(sno=1, description="PU Roller 50mm", hsn_code="3926",
                        quantity=Decimal("10"), rate=Decimal("150.00"))],
    ).with_totals()


@pytest.fixture
def saved_bill(valid_draft):
    bill = Bill(id="bill_123", **valid_draft.to_record())
    bill.created_at = datetime(2025, 3, 14, 10, 30)
    bill.updated_at = datetime(2025, 3, 14, 10, 30)
    return bill
