from .unit_of_work import SqlAlchemyUnitOfWork
from .pdf_service import ReportLabPdfService
from .drive_service import (
    DisabledDriveSyncService,
    AppsScriptDriveSyncService,
    create_drive_sync_service,
    drive_view_link,
)

__all__ = [
    "SqlAlchemyUnitOfWork",
    "ReportLabPdfService",
    "DisabledDriveSyncService",
    "AppsScriptDriveSyncService",
    "create_drive_sync_service",
    "drive_view_link",
]
