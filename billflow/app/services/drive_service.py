"""Drive Sync Service Interface

Defines the contract for uploading invoice PDFs to cloud storage.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional
from pydantic import BaseModel

DRIVE_VIEW_URL = "https://drive.google.com/file/d/{file_id}/view"


def drive_view_link(file_id: Optional[str]) -> str:
    """Shareable view link for a Drive file id ("" when there is none)"""
    return DRIVE_VIEW_URL.format(file_id=file_id) if file_id else ""


class DriveSyncError(Exception):
    """Upload or delete against cloud storage failed"""


class DriveUploadResult(BaseModel):
    """
    Outcome of an upload

    Both fields are empty when sync is not configured.
    """

    file_id: str = ""
    link: str = ""

    @property
    def synced(self) -> bool:
        return bool(self.link)


class DriveSyncService(ABC):
    """
    Abstract service for syncing invoice PDFs

    Implementations can store files in:
    - Google Drive (via Apps Script web app)
    - Nowhere (sync disabled)
    """

    @abstractmethod
    async def upload_pdf(
        self,
        invoice_no: str,
        pdf_bytes: bytes,
        invoice_date: date,
        existing_file_id: Optional[str] = None,
    ) -> DriveUploadResult:
        """
        Upload an invoice PDF

        Passing existing_file_id overwrites that file instead of creating a
        new one, so re-syncing an edited bill keeps the same link.

        Args:
            invoice_no: Invoice number (used in the file name)
            pdf_bytes: Rendered PDF
            invoice_date: Invoice date (selects the YYYY/MM folder)
            existing_file_id: File to overwrite, if previously synced

        Returns:
            DriveUploadResult with file id and shareable link

        Raises:
            DriveSyncError: the upload failed
        """
        pass

    @abstractmethod
    async def delete_file(self, file_id: str) -> None:
        """
        Delete a previously uploaded file

        Args:
            file_id: File to delete

        Raises:
            DriveSyncError: the delete failed
        """
        pass
