"""Invoice Arithmetic

Line amounts, GST amounts, invoice totals and the amount-in-words rendering
printed on tax invoices. All money is Decimal, rounded half away from zero
to two places.
"""

from decimal import Decimal, ROUND_FLOOR, ROUND_HALF_UP
from typing import Any, Iterable, Mapping, NamedTuple

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0.00")

_ONES = [
    "", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine", "Ten",
    "Eleven", "Twelve", "Thirteen", "Fourteen", "Fifteen", "Sixteen", "Seventeen",
    "Eighteen", "Nineteen",
]
_TENS = ["", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety"]

CRORE = 10_000_000
LAKH = 100_000
THOUSAND = 1_000


class InvoiceTotals(NamedTuple):
    """Derived totals of an invoice"""

    subtotal: Decimal
    sgst_amount: Decimal
    cgst_amount: Decimal
    igst_amount: Decimal
    grand_total: Decimal


def to_decimal(value: Any) -> Decimal:
    """Coerce int/float/str/None to Decimal (floats go through str)"""
    if isinstance(value, Decimal):
        return value
    if value is None or value == "":
        return Decimal("0")
    return Decimal(str(value))


def round_money(value: Any) -> Decimal:
    return to_decimal(value).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def compute_item_amount(quantity: Any, rate: Any) -> Decimal:
    """
    Amount of one invoice line

    Negative inputs are not rejected here; validation belongs to the caller.

    Args:
        quantity: Quantity billed
        rate: Price per unit

    Returns:
        quantity * rate rounded to 2 places
    """
    return round_money(to_decimal(quantity) * to_decimal(rate))


def compute_tax(base: Any, rate: Any) -> Decimal:
    """
    Tax on a base amount

    Args:
        base: Taxable amount
        rate: Tax rate as a fraction (9% -> 0.09)

    Returns:
        base * rate rounded to 2 places
    """
    return round_money(to_decimal(base) * to_decimal(rate))


def _amount_of(item: Any) -> Decimal:
    if isinstance(item, Mapping):
        return to_decimal(item.get("amount"))
    return to_decimal(item.amount)


def recompute_totals(
    items: Iterable[Any],
    sgst_rate: Any,
    cgst_rate: Any,
    igst_rate: Any,
) -> InvoiceTotals:
    """
    Recompute every derived total from the item list and tax rates

    There is no incremental update: call this after any change to items or
    rates. Calling it twice on the same inputs gives the same result.

    Args:
        items: BillItem models or item dicts carrying an ``amount``
        sgst_rate: SGST percentage (0-28)
        cgst_rate: CGST percentage (0-28)
        igst_rate: IGST percentage (0-28)

    Returns:
        InvoiceTotals
    """
    subtotal = sum((_amount_of(item) for item in items), ZERO)
    sgst_amount = compute_tax(subtotal, to_decimal(sgst_rate) / 100)
    cgst_amount = compute_tax(subtotal, to_decimal(cgst_rate) / 100)
    igst_amount = compute_tax(subtotal, to_decimal(igst_rate) / 100)
    grand_total = subtotal + sgst_amount + cgst_amount + igst_amount

    return InvoiceTotals(
        subtotal=subtotal,
        sgst_amount=sgst_amount,
        cgst_amount=cgst_amount,
        igst_amount=igst_amount,
        grand_total=grand_total,
    )


def _below_thousand(n: int) -> str:
    if n == 0:
        return ""
    if n < 20:
        return _ONES[n]
    if n < 100:
        return _TENS[n // 10] + (" " + _ONES[n % 10] if n % 10 else "")
    return _ONES[n // 100] + " Hundred" + (" " + _below_thousand(n % 100) if n % 100 else "")


def integer_to_words(n: int) -> str:
    """
    Spell a non-negative integer using Indian grouping

    Crore multipliers are spelled recursively, so 10^10 reads
    "One Thousand Crore".
    """
    if n == 0:
        return "Zero"

    parts = []
    if n >= CRORE:
        crores, n = divmod(n, CRORE)
        parts.append(integer_to_words(crores) + " Crore")
    if n >= LAKH:
        lakhs, n = divmod(n, LAKH)
        parts.append(_below_thousand(lakhs) + " Lakh")
    if n >= THOUSAND:
        thousands, n = divmod(n, THOUSAND)
        parts.append(_below_thousand(thousands) + " Thousand")
    if n > 0:
        parts.append(_below_thousand(n))

    return " ".join(parts)


def amount_to_words(amount: Any) -> str:
    """
    Render a rupee amount in words

    Examples:
        1500     -> "One Thousand Five Hundred Rupees Only"
        1234.50  -> "One Thousand Two Hundred Thirty Four Rupees and Fifty Paise Only"

    Args:
        amount: Non-negative amount

    Returns:
        "<rupees> Rupees[ and <paise> Paise] Only"

    Raises:
        ValueError: amount is negative
    """
    value = to_decimal(amount)
    if value < 0:
        raise ValueError(f"Cannot spell a negative amount: {value}")
    # Sub-paise input rounds into paise, and 100 paise carry into rupees
    value = round_money(value)
    if value == 0:
        return "Zero Rupees Only"

    rupees = int(value.to_integral_value(rounding=ROUND_FLOOR))
    paise = int((value - rupees) * 100)

    words = integer_to_words(rupees) + " Rupees"
    if paise > 0:
        words += " and " + integer_to_words(paise) + " Paise"
    return words + " Only"
