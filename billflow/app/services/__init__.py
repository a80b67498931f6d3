from .unit_of_work import UnitOfWork
from .pdf_service import PdfService
from .drive_service import DriveSyncService, DriveSyncError, DriveUploadResult, drive_view_link

__all__ = [
    "UnitOfWork",
    "PdfService",
    "DriveSyncService",
    "DriveSyncError",
    "DriveUploadResult",
    "drive_view_link",
]
