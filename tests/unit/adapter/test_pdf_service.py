"""Unit tests for ReportLab PDF service"""

import pytest
from datetime import date
from decimal import Decimal

from billflow.adapter.services.pdf_service import ReportLabPdfService, _rate_label
from billflow.domain.bill import Bill, BillItem
from billflow.domain.bill_draft import BillDraft
from billflow.domain.company import CompanyProfile


def _bill(item_count):
    draft = BillDraft(
        invoice_no="SC20250007",
        invoice_date=date(2025, 3, 14),
        buyer_name="Acme & Sons <Engineering>",
        buyer_address="12, Industrial Estate\nAmbattur, Chennai",
        buyer_gstin="33AAAAA0000A1Z5",
        po_no="PO-118",
        po_date=date(2025, 3, 1),
        items=[
            BillItem(sno=n, description=f"Item {n}", hsn_code="3926",
                     quantity=Decimal("2"), rate=Decimal("125.50"))
            for n in range(1, item_count + 1)
        ],
    ).with_totals()
    return Bill(id="bill_123", **draft.to_record())


class TestReportLabPdfService:
    """Test tax invoice rendering"""

    @pytest.mark.parametrize("item_count", [1, 8, 25])
    def test_renders_pdf(self, item_count):
        pdf = ReportLabPdfService().render_tax_invoice(_bill(item_count), CompanyProfile())

        assert pdf.startswith(b"%PDF")
        assert len(pdf) > 1000

    def test_custom_company(self):
        company = CompanyProfile(name="Test Traders", jurisdiction="Madurai")

        pdf = ReportLabPdfService().render_tax_invoice(_bill(2), company)

        assert pdf.startswith(b"%PDF")

    def test_rate_label(self):
        assert _rate_label(Decimal("9.00")) == "9"
        assert _rate_label(Decimal("2.50")) == "2.5"
        assert _rate_label(Decimal("0")) == "0"
