"""Unit tests for CreateBill use case"""

import pytest
from datetime import datetime
from decimal import Decimal

from billflow.app.use_cases.billing.create_bill import CreateBill
from billflow.domain.bill import BillStatus
from billflow.domain.bill_draft import BillDraft


def _echo_create(bill):
    bill.id = "bill_new"
    bill.created_at = datetime(2025, 3, 14, 10, 30)
    bill.updated_at = datetime(2025, 3, 14, 10, 30)
    return bill


@pytest.fixture
def use_case(mock_uow, mock_bill_repo):
    mock_bill_repo.create.side_effect = _echo_create
    return CreateBill(uow=mock_uow, bill_repo=mock_bill_repo)


class TestCreateBill:
    """Test suite for CreateBill use case"""

    @pytest.mark.asyncio
    async def test_successful_creation(self, use_case, mock_uow, mock_bill_repo, valid_draft):
        """Saved bill is final with recomputed totals"""
        # Act
        result = await use_case.execute(valid_draft)

        # Assert
        assert result.is_ok()
        bill = result.value
        assert bill.id == "bill_new"
        assert bill.invoice_no == "SC20250007"
        assert bill.status == BillStatus.FINAL.value
        assert bill.subtotal == Decimal("1500.00")
        assert bill.grand_total == Decimal("1770.00")
        assert bill.amount_in_words == "One Thousand Seven Hundred Seventy Rupees Only"
        mock_uow.commit.assert_called_once()
        mock_uow.rollback.assert_not_called()

    @pytest.mark.asyncio
    async def test_client_totals_are_recomputed(self, use_case, mock_bill_repo, valid_draft):
        tampered = valid_draft.model_copy(update={"grand_total": Decimal("1.00")})

        result = await use_case.execute(tampered)

        assert result.is_ok()
        saved = mock_bill_repo.create.call_args[0][0]
        assert saved.grand_total == Decimal("1770.00")

    @pytest.mark.asyncio
    async def test_validation_error_saves_nothing(self, use_case, mock_uow, mock_bill_repo):
        """Invalid draft returns field messages and never reaches the repository"""
        result = await use_case.execute(BillDraft(buyer_gstin="BAD"))

        assert result.is_err()
        assert result.error.code == "VALIDATION_ERROR"
        assert result.error.details["buyer_name"] == "Buyer name is required"
        assert result.error.details["buyer_gstin"] == "Invalid GSTIN format"
        mock_bill_repo.create.assert_not_called()
        mock_uow.commit.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_invoice_number_is_assigned(self, use_case, mock_bill_repo, valid_draft):
        mock_bill_repo.list_invoice_numbers.return_value = ["SC20250001", "SC20250003"]

        result = await use_case.execute(valid_draft.model_copy(update={"invoice_no": ""}))

        assert result.is_ok()
        assert result.value.invoice_no == "SC20250004"
        mock_bill_repo.list_invoice_numbers.assert_called_once_with("SC2025")

    @pytest.mark.asyncio
    async def test_repository_failure_rolls_back(self, use_case, mock_uow, mock_bill_repo, valid_draft):
        mock_bill_repo.create.side_effect = Exception("UNIQUE constraint failed: bills.invoice_no")

        result = await use_case.execute(valid_draft)

        assert result.is_err()
        assert result.error.code == "CREATE_BILL_FAILED"
        assert "UNIQUE" in result.error.reason
        mock_uow.rollback.assert_called_once()
        mock_uow.commit.assert_not_called()
