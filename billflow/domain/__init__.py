from .base import BaseModel, generate_uuid
from .bill import Bill, BillItem, BillStatus
from .bill_draft import BillDraft
from .bill_filter import FilterOptions, SearchField, TimeRange
from .company import CompanyProfile
from .dashboard import CustomerRevenue, DashboardStats, MonthlyRevenue
from .exceptions import BillEditError, BillValidationError

__all__ = [
    "BaseModel",
    "generate_uuid",
    "Bill",
    "BillItem",
    "BillStatus",
    "BillDraft",
    "FilterOptions",
    "SearchField",
    "TimeRange",
    "CompanyProfile",
    "CustomerRevenue",
    "DashboardStats",
    "MonthlyRevenue",
    "BillEditError",
    "BillValidationError",
]
