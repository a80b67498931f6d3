"""Drive Sync Service Implementations

Provides concrete implementations for syncing invoice PDFs to Google Drive.
"""

import base64
import logging
from datetime import date
from typing import Optional
import httpx
from billflow.app.services.drive_service import (
    DriveSyncError,
    DriveSyncService,
    DriveUploadResult,
    drive_view_link,
)

logger = logging.getLogger(__name__)


class DisabledDriveSyncService(DriveSyncService):
    """
    Drive sync service used when no Apps Script URL is configured

    Uploads are skipped and reported with an empty result.
    """

    async def upload_pdf(
        self,
        invoice_no: str,
        pdf_bytes: bytes,
        invoice_date: date,
        existing_file_id: Optional[str] = None,
    ) -> DriveUploadResult:
        logger.debug(f"Drive sync disabled, skipping upload of invoice {invoice_no}")
        return DriveUploadResult()

    async def delete_file(self, file_id: str) -> None:
        logger.debug(f"Drive sync disabled, skipping delete of file {file_id}")


class AppsScriptDriveSyncService(DriveSyncService):
    """
    Drive sync service backed by a Google Apps Script web app

    The script accepts a JSON POST with an ``action`` ("upload" or "delete")
    and answers with ``{"status", "fileId", "url"}``.
    """

    def __init__(self, script_url: str, timeout: float = 30.0):
        """
        Initialize Apps Script drive sync service

        Args:
            script_url: Deployed Apps Script web app URL
            timeout: Request timeout in seconds
        """
        self.script_url = script_url
        self.timeout = timeout

    async def _post(self, payload: dict) -> dict:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
                response = await client.post(self.script_url, json=payload)
                response.raise_for_status()
                body = response.json()
        except httpx.HTTPError as e:
            logger.error(f"Drive script request ({payload.get('action')}) failed: {e}")
            raise DriveSyncError(f"Failed to connect to Google Script: {e}") from e
        except ValueError as e:
            logger.error(f"Drive script returned a non-JSON response: {e}")
            raise DriveSyncError("Google Script returned an invalid response") from e

        if not isinstance(body, dict):
            logger.error(f"Drive script returned unexpected JSON: {body!r}")
            raise DriveSyncError("Google Script returned an invalid response")

        if body.get("status") == "error":
            message = body.get("message") or "Google Script reported an error"
            logger.error(f"Drive script error ({payload.get('action')}): {message}")
            raise DriveSyncError(message)

        return body

    async def upload_pdf(
        self,
        invoice_no: str,
        pdf_bytes: bytes,
        invoice_date: date,
        existing_file_id: Optional[str] = None,
    ) -> DriveUploadResult:
        """
        Upload invoice PDF to Bills/YYYY/MM on Drive

        Args:
            invoice_no: Invoice number (file is named invoice_<no>.pdf)
            pdf_bytes: Rendered PDF
            invoice_date: Invoice date (selects the folder)
            existing_file_id: File to overwrite, if previously synced

        Returns:
            DriveUploadResult with file id and link

        Raises:
            DriveSyncError: connection failure or script error
        """
        encoded = base64.b64encode(pdf_bytes).decode("utf-8")
        payload = {
            "action": "upload",
            "filename": f"invoice_{invoice_no}.pdf",
            "fileData": f"data:application/pdf;base64,{encoded}",
            "folderName": f"Bills/{invoice_date.year}/{invoice_date.month:02d}",
            "existingFileId": existing_file_id,
        }

        body = await self._post(payload)
        file_id = body.get("fileId") or ""
        link = body.get("url") or drive_view_link(file_id)

        logger.info(f"Synced invoice {invoice_no} to Drive file {file_id}")
        return DriveUploadResult(file_id=file_id, link=link)

    async def delete_file(self, file_id: str) -> None:
        """
        Delete a Drive file

        Args:
            file_id: File to delete (no-op when empty)

        Raises:
            DriveSyncError: connection failure or script error
        """
        if not file_id:
            return
        await self._post({"action": "delete", "fileId": file_id})
        logger.info(f"Deleted Drive file {file_id}")


def create_drive_sync_service(
    script_url: Optional[str] = None, timeout: float = 30.0
) -> DriveSyncService:
    """
    Factory function to create appropriate drive sync service

    Args:
        script_url: Optional Apps Script URL. If provided, uploads go to
                    Drive. Otherwise, sync is disabled.
        timeout: Request timeout in seconds

    Returns:
        Configured DriveSyncService
    """
    if script_url:
        return AppsScriptDriveSyncService(script_url, timeout=timeout)
    return DisabledDriveSyncService()
