"""Background workers for the billing service"""
from .backup_export import BackupExportWorker

__all__ = ["BackupExportWorker"]
