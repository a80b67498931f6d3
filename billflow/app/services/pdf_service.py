"""PDF Generation Service Interface

Defines the contract for rendering tax invoices to PDF.
"""

from abc import ABC, abstractmethod
from billflow.domain.bill import Bill
from billflow.domain.company import CompanyProfile


class PdfService(ABC):
    """
    Service interface for PDF generation

    The company profile is passed in explicitly; implementations hold no
    company state of their own.
    """

    @abstractmethod
    def render_tax_invoice(self, bill: Bill, company: CompanyProfile) -> bytes:
        """
        Render a GST tax invoice

        Args:
            bill: Saved bill to render
            company: Issuing company printed in the header and footer

        Returns:
            PDF document as bytes
        """
        pass
