"""ReportLab PDF Generation Service Implementation

Renders GST tax invoices using ReportLab.
"""

from io import BytesIO
from typing import List
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import (
    SimpleDocTemplate,
    Table,
    TableStyle,
    Paragraph,
    Spacer,
)

from billflow.app.services.pdf_service import PdfService
from billflow.domain.bill import Bill
from billflow.domain.company import CompanyProfile
from billflow.domain.formatting import format_date, format_inr

# Items table is padded with blank rows up to this count
MIN_ITEM_ROWS = 8

BRAND_BLUE = colors.HexColor("#1E88C9")
GRID_GREY = colors.HexColor("#7F8C8D")

TERMS = [
    "Goods once sold will not be taken back.",
    "All transactions are subject to {jurisdiction} Jurisdiction.",
    "Payments are to be made by A/c Payee Cheque Payable at {jurisdiction}.",
    "Other Bank Transfers : NEFT / RTGS / UPI",
    "Interest at the rate of 36% will be charged if not paid within due date.",
]


def _rate_label(rate) -> str:
    """9.00 -> '9', 2.50 -> '2.5'"""
    text = f"{rate:f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _quantity_label(quantity) -> str:
    if not quantity:
        return ""
    return _rate_label(quantity)


class ReportLabPdfService(PdfService):
    """
    ReportLab implementation of PdfService

    Generates A4 GST tax invoices laid out like the printed bill book:
    company header, invoice block, buyer and delivery details, item table,
    tax breakup, bank details, terms and signatory.
    """

    def __init__(self):
        styles = getSampleStyleSheet()
        self.company_style = ParagraphStyle(
            "CompanyStyle",
            parent=styles["Heading1"],
            fontSize=22,
            spaceAfter=4,
            textColor=BRAND_BLUE,
        )
        self.tagline_style = ParagraphStyle(
            "TaglineStyle",
            parent=styles["Normal"],
            fontSize=8,
            leading=10,
        )
        self.title_style = ParagraphStyle(
            "TitleStyle",
            parent=styles["Heading2"],
            fontSize=14,
            alignment=1,
            textColor=colors.white,
        )
        self.normal_style = ParagraphStyle(
            "NormalStyle",
            parent=styles["Normal"],
            fontSize=9,
            leading=11,
        )
        self.small_style = ParagraphStyle(
            "SmallStyle",
            parent=styles["Normal"],
            fontSize=8,
            leading=10,
        )

    def _p(self, text: str, style=None) -> Paragraph:
        return Paragraph(text, style or self.normal_style)

    def _header(self, company: CompanyProfile) -> List:
        return [
            self._p(escape(company.name), self.company_style),
            self._p(escape(company.tagline1), self.tagline_style),
            self._p(escape(company.tagline2), self.tagline_style),
            self._p(f"<b>{escape(company.address)}</b>", self.tagline_style),
            self._p(f"Mob : {escape(company.mobile)}", self.tagline_style),
            Spacer(1, 3 * mm),
        ]

    def _invoice_block(self, bill: Bill, company: CompanyProfile) -> Table:
        data = [
            [
                self._p(
                    f"<b>GSTIN : {escape(company.gstin)}</b><br/>"
                    f"<b>Email :</b> {escape(company.email)}"
                ),
                self._p("<b>TAX INVOICE</b>", self.title_style),
                self._p(
                    f"<b>No :</b> {escape(bill.invoice_no)}<br/>"
                    f"<b>Date :</b> {format_date(bill.invoice_date)}"
                ),
            ]
        ]
        table = Table(data, colWidths=[70 * mm, 45 * mm, 55 * mm])
        table.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (1, 0), (1, 0), BRAND_BLUE),
                    ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                    ("BOX", (0, 0), (-1, -1), 0.75, GRID_GREY),
                ]
            )
        )
        return table

    def _buyer_block(self, bill: Bill) -> Table:
        po_reference = escape(bill.po_no or "")
        if bill.po_date:
            po_reference += f" / {format_date(bill.po_date)}"

        buyer_lines = f"<b>To M/s.</b> {escape(bill.buyer_name)}"
        if bill.buyer_address:
            buyer_lines += "<br/>" + escape(bill.buyer_address).replace("\n", "<br/>")

        data = [
            [
                self._p(buyer_lines),
                self._p(
                    f"<b>Buyer's GSTIN :</b> {escape(bill.buyer_gstin or '')}<br/>"
                    f"<b>PO No / Dated :</b> {po_reference}"
                ),
            ],
            [
                self._p(
                    f"<b>Our DC No :</b> {escape(bill.dc_no or '')} &nbsp;&nbsp; "
                    f"<b>Date :</b> {format_date(bill.dc_date)}"
                ),
                self._p(f"<b>Mode of Transport :</b> {escape(bill.mode_of_transport or '')}"),
            ],
        ]
        table = Table(data, colWidths=[100 * mm, 70 * mm])
        table.setStyle(
            TableStyle(
                [
                    ("GRID", (0, 0), (-1, -1), 0.5, GRID_GREY),
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
                ]
            )
        )
        return table

    def _items_table(self, bill: Bill) -> Table:
        data = [["S.No.", "DESCRIPTION", "HSN Code", "Quantity", "Rate / Unit\nRs. Ps.", "Amount\nRs. Ps."]]
        for item in bill.line_items:
            data.append(
                [
                    str(item.sno),
                    self._p(escape(item.description)),
                    item.hsn_code,
                    _quantity_label(item.quantity),
                    format_inr(item.rate, symbol=False) if item.rate else "",
                    format_inr(item.amount, symbol=False) if item.amount else "",
                ]
            )
        for _ in range(max(0, MIN_ITEM_ROWS - len(bill.items))):
            data.append(["", "", "", "", "", ""])

        table = Table(
            data,
            colWidths=[13 * mm, 57 * mm, 20 * mm, 20 * mm, 28 * mm, 32 * mm],
            repeatRows=1,
        )
        table.setStyle(
            TableStyle(
                [
                    # Header row
                    ("BACKGROUND", (0, 0), (-1, 0), BRAND_BLUE),
                    ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, 0), 8),
                    ("ALIGN", (0, 0), (-1, 0), "CENTER"),
                    # Data rows
                    ("FONTSIZE", (0, 1), (-1, -1), 9),
                    ("ALIGN", (0, 1), (0, -1), "CENTER"),
                    ("ALIGN", (2, 1), (3, -1), "CENTER"),
                    ("ALIGN", (4, 1), (-1, -1), "RIGHT"),
                    ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                    ("GRID", (0, 0), (-1, -1), 0.5, GRID_GREY),
                    ("BOTTOMPADDING", (0, 1), (-1, -1), 5),
                    ("TOPPADDING", (0, 1), (-1, -1), 5),
                ]
            )
        )
        return table

    def _totals_block(self, bill: Bill) -> Table:
        summary = [
            ["Total", format_inr(bill.subtotal, symbol=False)],
            [f"SGST @ {_rate_label(bill.sgst_rate)}%", format_inr(bill.sgst_amount, symbol=False)],
            [f"CGST @ {_rate_label(bill.cgst_rate)}%", format_inr(bill.cgst_amount, symbol=False)],
            [f"IGST @ {_rate_label(bill.igst_rate)}%", format_inr(bill.igst_amount, symbol=False)],
            ["Grand Total :", format_inr(bill.grand_total)],
        ]
        summary_table = Table(summary, colWidths=[30 * mm, 30 * mm])
        summary_table.setStyle(
            TableStyle(
                [
                    ("FONTSIZE", (0, 0), (-1, -1), 9),
                    ("ALIGN", (1, 0), (1, -1), "RIGHT"),
                    ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
                    ("LINEABOVE", (0, -1), (-1, -1), 1, BRAND_BLUE),
                ]
            )
        )

        words = self._p(f"<b>Amount in Words :</b><br/>{escape(bill.amount_in_words)}")
        table = Table([[words, summary_table]], colWidths=[110 * mm, 60 * mm])
        table.setStyle(
            TableStyle(
                [
                    ("BOX", (0, 0), (-1, -1), 0.5, GRID_GREY),
                    ("LINEAFTER", (0, 0), (0, 0), 0.5, GRID_GREY),
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                ]
            )
        )
        return table

    def _footer(self, company: CompanyProfile) -> Table:
        bank = self._p(
            "<b>Bank Details</b><br/>"
            f"A/c Name : {escape(company.name)}<br/>"
            f"Bank : {escape(company.bank_name)}<br/>"
            f"A/c No : {escape(company.account_no)}<br/>"
            f"IFSC : {escape(company.ifsc_code)}<br/>"
            f"Branch : {escape(company.bank_branch)}",
            self.small_style,
        )
        terms = "<br/>".join(
            f"{number}. {escape(term.format(jurisdiction=company.jurisdiction))}"
            for number, term in enumerate(TERMS, start=1)
        )
        terms_paragraph = self._p(f"<b>Terms &amp; Conditions</b><br/>{terms}", self.small_style)
        signatory = self._p(
            f"for <b>{escape(company.name)}</b><br/><br/><br/><br/>Authorised Signatory",
            self.small_style,
        )

        table = Table([[bank, terms_paragraph, signatory]], colWidths=[50 * mm, 75 * mm, 45 * mm])
        table.setStyle(
            TableStyle(
                [
                    ("GRID", (0, 0), (-1, -1), 0.5, GRID_GREY),
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                    ("ALIGN", (2, 0), (2, 0), "RIGHT"),
                ]
            )
        )
        return table

    def render_tax_invoice(self, bill: Bill, company: CompanyProfile) -> bytes:
        """
        Render a GST tax invoice PDF

        Args:
            bill: Saved bill to render
            company: Issuing company profile

        Returns:
            PDF document as bytes
        """
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=20 * mm,
            leftMargin=20 * mm,
            topMargin=15 * mm,
            bottomMargin=15 * mm,
            title=f"Invoice {bill.invoice_no}",
            author=company.name,
        )

        elements = self._header(company)
        elements.append(self._invoice_block(bill, company))
        elements.append(Spacer(1, 3 * mm))
        elements.append(self._buyer_block(bill))
        elements.append(Spacer(1, 3 * mm))
        elements.append(self._items_table(bill))
        elements.append(self._totals_block(bill))
        elements.append(Spacer(1, 3 * mm))
        elements.append(self._footer(company))

        # Build PDF
        doc.build(elements)
        pdf_bytes = buffer.getvalue()
        buffer.close()

        return pdf_bytes
