"""Bill Query Engine

Filtering for the bill list and aggregation for the dashboard. Works on
any objects exposing the Bill attributes (entities, drafts, mocks).
"""

from calendar import monthrange
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Tuple

from billflow.domain.bill_filter import FilterOptions, SearchField, TimeRange
from billflow.domain.dashboard import CustomerRevenue, DashboardStats, MonthlyRevenue
from billflow.domain.invoice_math import ZERO, to_decimal

MONTHLY_REVENUE_WINDOW = 6
TOP_CUSTOMERS_LIMIT = 5

_MONTHS_BACK = {
    TimeRange.LAST_1_MONTH: 1,
    TimeRange.LAST_3_MONTHS: 3,
    TimeRange.LAST_6_MONTHS: 6,
}

_SEARCH_ATTRIBUTES = {
    SearchField.BUYER_NAME: "buyer_name",
    SearchField.INVOICE_NO: "invoice_no",
    SearchField.GSTIN: "buyer_gstin",
}


def _as_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str):
        return date.fromisoformat(value[:10])
    return value


def months_before(day: date, months: int) -> date:
    """
    Same day of the month, ``months`` calendar months earlier

    The day is clamped to the end of the target month (31 May -> 28/29 Feb).
    """
    month_index = day.year * 12 + (day.month - 1) - months
    year, month_zero = divmod(month_index, 12)
    month = month_zero + 1
    _, last_day = monthrange(year, month)
    return date(year, month, min(day.day, last_day))


def resolve_date_bounds(
    options: FilterOptions, today: date
) -> Tuple[Optional[date], Optional[date]]:
    """
    Inclusive (start, end) dates for the options; None means unbounded

    The end bound only exists for custom ranges.
    """
    if options.time_range == TimeRange.CUSTOM:
        return options.start_date, options.end_date
    return months_before(today, _MONTHS_BACK[options.time_range]), None


def filter_bills(
    bills: Iterable[Any],
    options: FilterOptions,
    today: Optional[date] = None,
) -> List[Any]:
    """
    Filter bills by date window and search term, newest first

    Args:
        bills: Bills to filter
        options: Time range and search options
        today: Reference date for relative ranges (defaults to today)

    Returns:
        Matching bills sorted by invoice_date descending; ties keep their
        input order
    """
    start, end = resolve_date_bounds(options, today or date.today())
    filtered = list(bills)

    if start is not None:
        filtered = [bill for bill in filtered if _as_date(bill.invoice_date) >= start]
    if end is not None:
        filtered = [bill for bill in filtered if _as_date(bill.invoice_date) <= end]

    if options.search_term:
        term = options.search_term.lower()
        attribute = _SEARCH_ATTRIBUTES[options.search_field]
        filtered = [
            bill for bill in filtered
            if term in (getattr(bill, attribute) or "").lower()
        ]

    return sorted(filtered, key=lambda bill: _as_date(bill.invoice_date), reverse=True)


def aggregate_dashboard(bills: Iterable[Any]) -> DashboardStats:
    """
    Aggregate bills into dashboard statistics

    Monthly revenue keeps the last 6 months that have bills (no zero
    filling). Customers are grouped by exact buyer name.
    """
    bills = list(bills)

    total_revenue = ZERO
    sgst_collected = ZERO
    cgst_collected = ZERO
    igst_collected = ZERO
    monthly: Dict[str, Decimal] = {}
    customers: Dict[str, Decimal] = {}

    for bill in bills:
        grand_total = to_decimal(bill.grand_total)
        total_revenue += grand_total
        sgst_collected += to_decimal(bill.sgst_amount)
        cgst_collected += to_decimal(bill.cgst_amount)
        igst_collected += to_decimal(bill.igst_amount)

        day = _as_date(bill.invoice_date)
        month_key = f"{day.year}-{day.month:02d}"
        monthly[month_key] = monthly.get(month_key, ZERO) + grand_total
        customers[bill.buyer_name] = customers.get(bill.buyer_name, ZERO) + grand_total

    monthly_revenue = [
        MonthlyRevenue(month=month, revenue=revenue)
        for month, revenue in sorted(monthly.items())
    ][-MONTHLY_REVENUE_WINDOW:]

    ranked = sorted(customers.items(), key=lambda entry: entry[1], reverse=True)
    top_customers = [
        CustomerRevenue(name=name, amount=amount)
        for name, amount in ranked[:TOP_CUSTOMERS_LIMIT]
    ]

    return DashboardStats(
        total_revenue=total_revenue,
        total_bills=len(bills),
        sgst_collected=sgst_collected,
        cgst_collected=cgst_collected,
        igst_collected=igst_collected,
        monthly_revenue=monthly_revenue,
        top_customers=top_customers,
    )
