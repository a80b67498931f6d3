"""Unit tests for GetBill, ListBills, GetNewBillDraft and GetDashboard"""

import pytest
from datetime import date
from decimal import Decimal

from billflow.app.use_cases.billing.get_bill import GetBill
from billflow.app.use_cases.billing.get_dashboard import GetDashboard
from billflow.app.use_cases.billing.get_new_bill_draft import GetNewBillDraft
from billflow.app.use_cases.billing.list_bills import ListBills
from billflow.domain.bill import Bill
from billflow.domain.bill_filter import FilterOptions, SearchField, TimeRange


def _copy_of(bill, **changes):
    data = {name: getattr(bill, name) for name in Bill.model_fields}
    data.update(changes)
    return Bill(**data)


class TestGetBill:
    @pytest.mark.asyncio
    async def test_found(self, mock_bill_repo, saved_bill):
        mock_bill_repo.get_by_id.return_value = saved_bill

        result = await GetBill(mock_bill_repo).execute("bill_123")

        assert result.is_ok()
        assert result.value.id == "bill_123"
        assert result.value.items[0].description == "PU Roller 50mm"
        mock_bill_repo.get_by_id.assert_called_once_with("bill_123")

    @pytest.mark.asyncio
    async def test_not_found(self, mock_bill_repo):
        mock_bill_repo.get_by_id.return_value = None

        result = await GetBill(mock_bill_repo).execute("missing")

        assert result.is_err()
        assert result.error.code == "BILL_NOT_FOUND"
        assert "missing" in result.error.message


class TestListBills:
    @pytest.mark.asyncio
    async def test_filters_and_sorts(self, mock_bill_repo, saved_bill):
        mock_bill_repo.list_all.return_value = [
            _copy_of(saved_bill, id="a", invoice_no="SC20250001", invoice_date=date(2025, 1, 5)),
            _copy_of(saved_bill, id="b", invoice_no="SC20250002", invoice_date=date(2025, 5, 20)),
            _copy_of(saved_bill, id="c", invoice_no="SC20250003", invoice_date=date(2025, 6, 1)),
        ]

        result = await ListBills(mock_bill_repo).execute(today=date(2025, 6, 15))

        assert result.is_ok()
        assert result.value.total == 2
        assert [bill.id for bill in result.value.bills] == ["c", "b"]

    @pytest.mark.asyncio
    async def test_search_option(self, mock_bill_repo, saved_bill):
        mock_bill_repo.list_all.return_value = [
            _copy_of(saved_bill, id="a", invoice_no="SC20250001"),
            _copy_of(saved_bill, id="b", invoice_no="SC20250002"),
        ]
        options = FilterOptions(
            time_range=TimeRange.CUSTOM,
            search_term="0002",
            search_field=SearchField.INVOICE_NO,
        )

        result = await ListBills(mock_bill_repo).execute(options)

        assert [bill.id for bill in result.value.bills] == ["b"]

    @pytest.mark.asyncio
    async def test_repository_failure(self, mock_bill_repo):
        mock_bill_repo.list_all.side_effect = Exception("connection refused")

        result = await ListBills(mock_bill_repo).execute()

        assert result.is_err()
        assert result.error.code == "LIST_BILLS_FAILED"


class TestGetNewBillDraft:
    @pytest.mark.asyncio
    async def test_next_number(self, mock_bill_repo):
        mock_bill_repo.list_invoice_numbers.return_value = ["SC20250001", "SC20250003"]

        result = await GetNewBillDraft(mock_bill_repo).execute(today=date(2025, 6, 1))

        assert result.is_ok()
        assert result.value.invoice_no == "SC20250004"
        assert result.value.invoice_date == date(2025, 6, 1)
        mock_bill_repo.list_invoice_numbers.assert_called_once_with("SC2025")

    @pytest.mark.asyncio
    async def test_first_of_year(self, mock_bill_repo):
        mock_bill_repo.list_invoice_numbers.return_value = []

        result = await GetNewBillDraft(mock_bill_repo).execute(today=date(2026, 1, 2))

        assert result.value.invoice_no == "SC20260001"


class TestGetDashboard:
    @pytest.mark.asyncio
    async def test_aggregates_all_bills(self, mock_bill_repo, saved_bill):
        mock_bill_repo.list_all.return_value = [
            _copy_of(saved_bill, id="a", grand_total=Decimal("100")),
            _copy_of(saved_bill, id="b", grand_total=Decimal("200")),
            _copy_of(saved_bill, id="c", grand_total=Decimal("300")),
        ]

        result = await GetDashboard(mock_bill_repo).execute()

        assert result.is_ok()
        assert result.value.total_revenue == Decimal("600")
        assert result.value.total_bills == 3
        assert result.value.top_customers[0].name == "Acme Engineering Works"

    @pytest.mark.asyncio
    async def test_failure(self, mock_bill_repo):
        mock_bill_repo.list_all.side_effect = Exception("timeout")

        result = await GetDashboard(mock_bill_repo).execute()

        assert result.error.code == "LIST_BILLS_FAILED"
