"""Dashboard statistics (derived, never persisted)"""

from decimal import Decimal
from typing import List
from pydantic import BaseModel, Field


class MonthlyRevenue(BaseModel):
    month: str = Field(..., description="Month key (YYYY-MM)")
    revenue: Decimal = Field(..., description="Sum of grand totals in the month")


class CustomerRevenue(BaseModel):
    name: str = Field(..., description="Buyer name")
    amount: Decimal = Field(..., description="Sum of grand totals billed to the buyer")


class DashboardStats(BaseModel):
    """Aggregates shown on the dashboard"""

    total_revenue: Decimal = Field(..., description="Sum of grand totals")
    total_bills: int = Field(..., description="Number of bills")
    sgst_collected: Decimal = Field(..., description="Sum of SGST amounts")
    cgst_collected: Decimal = Field(..., description="Sum of CGST amounts")
    igst_collected: Decimal = Field(..., description="Sum of IGST amounts")
    monthly_revenue: List[MonthlyRevenue] = Field(
        default_factory=list,
        description="Revenue per month, oldest first, last 6 months with data"
    )
    top_customers: List[CustomerRevenue] = Field(
        default_factory=list,
        description="Top 5 buyers by revenue"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "total_revenue": "600.00",
                "total_bills": 3,
                "sgst_collected": "45.76",
                "cgst_collected": "45.76",
                "igst_collected": "0.00",
                "monthly_revenue": [{"month": "2025-01", "revenue": "600.00"}],
                "top_customers": [{"name": "Chennai Bottlers Pvt Ltd", "amount": "600.00"}],
            }
        }
