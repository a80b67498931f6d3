"""Money and date formatting for invoices (en-IN conventions)"""

from datetime import date, datetime
from typing import Any, Union

from billflow.domain.invoice_math import round_money

RUPEE_SYMBOL = "₹"


def group_indian(whole: str) -> str:
    """Insert commas the Indian way: last three digits, then pairs (12,34,567)"""
    if len(whole) <= 3:
        return whole

    head, tail = whole[:-3], whole[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_inr(amount: Any, symbol: bool = True) -> str:
    """
    Format an amount as Indian rupees

    Args:
        amount: Amount to format
        symbol: Prefix the rupee sign

    Returns:
        e.g. "₹1,23,456.78", or "1,23,456.78" without symbol
    """
    value = round_money(amount)
    sign = "-" if value < 0 else ""
    whole, fraction = f"{abs(value):.2f}".split(".")
    prefix = RUPEE_SYMBOL if symbol else ""
    return f"{sign}{prefix}{group_indian(whole)}.{fraction}"


def format_date(value: Union[date, datetime, str, None]) -> str:
    """Format a date as dd/mm/yyyy; empty input gives an empty string"""
    if not value:
        return ""
    if isinstance(value, str):
        value = date.fromisoformat(value[:10])
    return value.strftime("%d/%m/%Y")
