"""Unit tests for bill filtering and dashboard aggregation"""

import pytest
from datetime import date
from decimal import Decimal
from types import SimpleNamespace

from billflow.domain.bill_filter import FilterOptions, SearchField, TimeRange
from billflow.domain.bill_query import (
    aggregate_dashboard,
    filter_bills,
    months_before,
    resolve_date_bounds,
)

TODAY = date(2025, 6, 15)


def make_bill(invoice_no, invoice_date, buyer_name="Acme Engineering Works",
              buyer_gstin="33AAAAA0000A1Z5", grand_total="100.00",
              sgst="0.00", cgst="0.00", igst="0.00"):
    return SimpleNamespace(
        invoice_no=invoice_no,
        invoice_date=invoice_date,
        buyer_name=buyer_name,
        buyer_gstin=buyer_gstin,
        grand_total=Decimal(grand_total),
        sgst_amount=Decimal(sgst),
        cgst_amount=Decimal(cgst),
        igst_amount=Decimal(igst),
    )


@pytest.fixture
def eight_months_of_bills():
    """One bill per month from Nov 2024 to Jun 2025, oldest first"""
    dates = [
        date(2024, 11, 10),
        date(2024, 12, 10),
        date(2025, 1, 10),
        date(2025, 2, 10),
        date(2025, 3, 10),
        date(2025, 4, 10),
        date(2025, 5, 10),
        date(2025, 6, 10),
    ]
    return [make_bill(f"SC2025{n:04d}", d) for n, d in enumerate(dates, start=1)]


class TestFilterBills:
    """Test bill list filtering"""

    def test_last_three_months_sorted_descending(self, eight_months_of_bills):
        """Only bills on or after 15 Mar 2025, newest first"""
        result = filter_bills(
            eight_months_of_bills, FilterOptions(time_range=TimeRange.LAST_3_MONTHS), today=TODAY
        )

        assert [b.invoice_date for b in result] == [
            date(2025, 6, 10),
            date(2025, 5, 10),
            date(2025, 4, 10),
        ]
        assert all(b.invoice_date >= date(2025, 3, 15) for b in result)

    def test_last_month(self, eight_months_of_bills):
        result = filter_bills(
            eight_months_of_bills, FilterOptions(time_range=TimeRange.LAST_1_MONTH), today=TODAY
        )

        assert [b.invoice_no for b in result] == ["SC20250008"]

    def test_last_six_months(self, eight_months_of_bills):
        result = filter_bills(
            eight_months_of_bills, FilterOptions(time_range=TimeRange.LAST_6_MONTHS), today=TODAY
        )

        assert len(result) == 6
        assert result[-1].invoice_date == date(2025, 1, 10)

    def test_window_start_is_inclusive(self):
        bills = [make_bill("SC20250001", date(2025, 3, 15)), make_bill("SC20250002", date(2025, 3, 14))]

        result = filter_bills(bills, FilterOptions(), today=TODAY)

        assert [b.invoice_no for b in result] == ["SC20250001"]

    def test_custom_range_inclusive(self, eight_months_of_bills):
        options = FilterOptions(
            time_range=TimeRange.CUSTOM,
            start_date=date(2025, 1, 10),
            end_date=date(2025, 3, 10),
        )

        result = filter_bills(eight_months_of_bills, options, today=TODAY)

        assert [b.invoice_date for b in result] == [
            date(2025, 3, 10),
            date(2025, 2, 10),
            date(2025, 1, 10),
        ]

    def test_custom_range_without_bounds_returns_all(self, eight_months_of_bills):
        result = filter_bills(
            eight_months_of_bills, FilterOptions(time_range=TimeRange.CUSTOM), today=TODAY
        )

        assert len(result) == 8

    def test_custom_range_open_end(self, eight_months_of_bills):
        options = FilterOptions(time_range=TimeRange.CUSTOM, start_date=date(2025, 5, 1))

        result = filter_bills(eight_months_of_bills, options, today=TODAY)

        assert len(result) == 2

    def test_search_buyer_name_case_insensitive(self):
        bills = [
            make_bill("SC20250001", date(2025, 6, 1), buyer_name="Acme Engineering Works"),
            make_bill("SC20250002", date(2025, 6, 2), buyer_name="Bharat Polymers"),
        ]
        options = FilterOptions(search_term="ACME")

        result = filter_bills(bills, options, today=TODAY)

        assert [b.invoice_no for b in result] == ["SC20250001"]

    def test_search_invoice_number(self, eight_months_of_bills):
        options = FilterOptions(
            time_range=TimeRange.LAST_6_MONTHS,
            search_term="0007",
            search_field=SearchField.INVOICE_NO,
        )

        result = filter_bills(eight_months_of_bills, options, today=TODAY)

        assert [b.invoice_no for b in result] == ["SC20250007"]

    def test_search_gstin_tolerates_empty(self):
        bills = [
            make_bill("SC20250001", date(2025, 6, 1), buyer_gstin=""),
            make_bill("SC20250002", date(2025, 6, 2), buyer_gstin="29ABCDE1234F2Z9"),
        ]
        options = FilterOptions(search_term="29abc", search_field=SearchField.GSTIN)

        result = filter_bills(bills, options, today=TODAY)

        assert [b.invoice_no for b in result] == ["SC20250002"]

    def test_same_date_keeps_input_order(self):
        bills = [
            make_bill("SC20250002", date(2025, 6, 1)),
            make_bill("SC20250001", date(2025, 6, 1)),
        ]

        result = filter_bills(bills, FilterOptions(), today=TODAY)

        assert [b.invoice_no for b in result] == ["SC20250002", "SC20250001"]

    def test_empty_input(self):
        assert filter_bills([], FilterOptions(), today=TODAY) == []


class TestMonthsBefore:
    def test_same_day(self):
        assert months_before(date(2025, 6, 15), 3) == date(2025, 3, 15)

    def test_crosses_year(self):
        assert months_before(date(2025, 2, 1), 3) == date(2024, 11, 1)

    def test_clamps_to_month_end(self):
        assert months_before(date(2025, 5, 31), 3) == date(2025, 2, 28)
        assert months_before(date(2024, 5, 31), 3) == date(2024, 2, 29)

    def test_bounds_for_relative_range(self):
        start, end = resolve_date_bounds(FilterOptions(), TODAY)

        assert start == date(2025, 3, 15)
        assert end is None


class TestAggregateDashboard:
    """Test dashboard aggregation"""

    def test_totals(self):
        bills = [
            make_bill("SC20250001", date(2025, 6, 1), grand_total="100"),
            make_bill("SC20250002", date(2025, 6, 2), grand_total="200"),
            make_bill("SC20250003", date(2025, 6, 3), grand_total="300"),
        ]

        stats = aggregate_dashboard(bills)

        assert stats.total_revenue == Decimal("600")
        assert stats.total_bills == 3

    def test_gst_collected(self):
        bills = [
            make_bill("SC20250001", date(2025, 6, 1), sgst="9.00", cgst="9.00"),
            make_bill("SC20250002", date(2025, 6, 2), igst="18.00"),
        ]

        stats = aggregate_dashboard(bills)

        assert stats.sgst_collected == Decimal("9.00")
        assert stats.cgst_collected == Decimal("9.00")
        assert stats.igst_collected == Decimal("18.00")

    def test_monthly_revenue_last_six_months_with_bills(self, eight_months_of_bills):
        stats = aggregate_dashboard(eight_months_of_bills)

        assert [m.month for m in stats.monthly_revenue] == [
            "2025-01", "2025-02", "2025-03", "2025-04", "2025-05", "2025-06",
        ]

    def test_monthly_revenue_skips_empty_months(self):
        bills = [
            make_bill("SC20250001", date(2025, 1, 5), grand_total="100"),
            make_bill("SC20250002", date(2025, 1, 20), grand_total="50"),
            make_bill("SC20250003", date(2025, 4, 2), grand_total="300"),
        ]

        stats = aggregate_dashboard(bills)

        assert [(m.month, m.revenue) for m in stats.monthly_revenue] == [
            ("2025-01", Decimal("150")),
            ("2025-04", Decimal("300")),
        ]

    def test_top_five_customers(self):
        totals = {"A": "500", "B": "100", "C": "700", "D": "300", "E": "200", "F": "50"}
        bills = [
            make_bill(f"SC2025{n:04d}", date(2025, 6, 1), buyer_name=name, grand_total=total)
            for n, (name, total) in enumerate(totals.items(), start=1)
        ]
        bills.append(make_bill("SC20250099", date(2025, 6, 2), buyer_name="B", grand_total="450"))

        stats = aggregate_dashboard(bills)

        assert [(c.name, c.amount) for c in stats.top_customers] == [
            ("C", Decimal("700")),
            ("B", Decimal("550")),
            ("A", Decimal("500")),
            ("D", Decimal("300")),
            ("E", Decimal("200")),
        ]

    def test_customer_names_are_exact(self):
        bills = [
            make_bill("SC20250001", date(2025, 6, 1), buyer_name="Acme"),
            make_bill("SC20250002", date(2025, 6, 1), buyer_name="ACME"),
        ]

        stats = aggregate_dashboard(bills)

        assert len(stats.top_customers) == 2

    def test_no_bills(self):
        stats = aggregate_dashboard([])

        assert stats.total_revenue == Decimal("0")
        assert stats.total_bills == 0
        assert stats.monthly_revenue == []
        assert stats.top_customers == []
