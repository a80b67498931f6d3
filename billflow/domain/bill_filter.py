"""Bill list filter options"""

from datetime import date
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class TimeRange(str, Enum):
    """Time windows offered on the bill list"""
    LAST_1_MONTH = "last1month"
    LAST_3_MONTHS = "last3months"
    LAST_6_MONTHS = "last6months"
    CUSTOM = "custom"


class SearchField(str, Enum):
    """Bill field the search term is matched against"""
    BUYER_NAME = "buyerName"
    INVOICE_NO = "invoiceNo"
    GSTIN = "gstin"


class FilterOptions(BaseModel):
    """
    Query descriptor for the bill list

    start_date/end_date only apply when time_range is custom.
    """

    time_range: TimeRange = Field(
        default=TimeRange.LAST_3_MONTHS,
        description="Time window (last1month, last3months, last6months, custom)"
    )

    start_date: Optional[date] = Field(
        default=None,
        description="Inclusive start date (custom range only)"
    )

    end_date: Optional[date] = Field(
        default=None,
        description="Inclusive end date (custom range only)"
    )

    search_term: str = Field(
        default="",
        description="Case-insensitive substring to search for"
    )

    search_field: SearchField = Field(
        default=SearchField.BUYER_NAME,
        description="Field searched (buyerName, invoiceNo, gstin)"
    )
