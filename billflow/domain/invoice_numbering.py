"""Invoice Numbering

Invoice numbers look like SC<year><4-digit sequence>, e.g. SC20250007.
The sequence restarts every calendar year.
"""

import re
from typing import Any, Iterable

INVOICE_PREFIX = "SC"
SEQUENCE_WIDTH = 4

_LEADING_DIGITS = re.compile(r"\d+")


def invoice_prefix(year: int) -> str:
    return f"{INVOICE_PREFIX}{year}"


def sequence_of(invoice_no: str, year: int) -> int:
    """
    Sequence part of an invoice number for the given year

    Returns 0 when the number belongs to another year or has no digits
    after the prefix.
    """
    prefix = invoice_prefix(year)
    if not invoice_no or not invoice_no.startswith(prefix):
        return 0
    match = _LEADING_DIGITS.match(invoice_no[len(prefix):])
    return int(match.group()) if match else 0


def next_invoice_number(existing: Iterable[Any], current_year: int) -> str:
    """
    Derive the next invoice number for the year

    Scans every existing number, so callers pass the full set (bills or
    plain invoice number strings).

    Args:
        existing: Bills (anything with ``invoice_no``) or invoice number strings
        current_year: Calendar year to number within

    Returns:
        Next invoice number, SC<year>0001 when the year has none yet
    """
    highest = 0
    for entry in existing:
        invoice_no = entry if isinstance(entry, str) else getattr(entry, "invoice_no", "")
        highest = max(highest, sequence_of(invoice_no, current_year))

    return f"{invoice_prefix(current_year)}{highest + 1:0{SEQUENCE_WIDTH}d}"
