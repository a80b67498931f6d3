"""Unit tests for BackupExportWorker"""

import os
import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from billflow.worker.backup_export import BackupExportWorker
from billflow.app.use_cases.billing.dtos import CsvExportDTO
from libs.result import Error, Return

CSV_CONTENT = (
    "Invoice No,Date,Buyer,GSTIN,Total,Status,Drive Link\n"
    '"SC20250007","2025-03-14","Acme Engineering Works","33AAAAA0000A1Z5","1770.00","final",""\n'
)


def _session_factory():
    session = MagicMock()
    session.__aenter__ = AsyncMock(return_value=session)
    session.__aexit__ = AsyncMock()
    return MagicMock(return_value=session)


class TestBackupExportWorkerInit:
    """Test worker initialization"""

    @patch("billflow.worker.backup_export.ApplicationConfig")
    @patch("billflow.worker.backup_export.create_async_engine")
    def test_initializes_with_default_config(self, mock_create_engine, mock_app_config):
        mock_app_config.DB_URI = "sqlite+aiosqlite:///./default.db"
        mock_app_config.BACKUP_OUTPUT_DIR = "backups"

        worker = BackupExportWorker()

        assert worker.db_uri == "sqlite+aiosqlite:///./default.db"
        assert worker.output_dir == "backups"
        mock_create_engine.assert_called_once()

    @patch("billflow.worker.backup_export.create_async_engine")
    def test_initializes_with_custom_values(self, mock_create_engine):
        worker = BackupExportWorker(db_uri="sqlite+aiosqlite:///./custom.db", output_dir="/tmp/x")

        assert worker.db_uri == "sqlite+aiosqlite:///./custom.db"
        assert worker.output_dir == "/tmp/x"


@pytest.mark.asyncio
class TestBackupExportWorkerRunOnce:
    """Test run_once execution"""

    @patch("billflow.worker.backup_export.ExportBillsCsv")
    @patch("billflow.worker.backup_export.SqlAlchemyBillRepository")
    @patch("billflow.worker.backup_export.create_async_engine")
    @patch("billflow.worker.backup_export.sessionmaker")
    async def test_writes_backup_file(
        self, mock_sessionmaker, mock_create_engine, mock_repo_class, mock_use_case_class, tmp_path
    ):
        mock_sessionmaker.return_value = _session_factory()
        mock_use_case = MagicMock()
        mock_use_case.execute = AsyncMock(
            return_value=Return.ok(
                CsvExportDTO(filename="billflow_backup_2025-06-15.csv", content=CSV_CONTENT, row_count=1)
            )
        )
        mock_use_case_class.return_value = mock_use_case

        worker = BackupExportWorker(output_dir=str(tmp_path / "backups"))
        path = await worker.run_once()

        assert path == os.path.join(str(tmp_path / "backups"), "billflow_backup_2025-06-15.csv")
        with open(path, encoding="utf-8") as r_file:
            assert r_file.read() == CSV_CONTENT

    @patch("billflow.worker.backup_export.ExportBillsCsv")
    @patch("billflow.worker.backup_export.SqlAlchemyBillRepository")
    @patch("billflow.worker.backup_export.create_async_engine")
    @patch("billflow.worker.backup_export.sessionmaker")
    async def test_raises_on_failure(
        self, mock_sessionmaker, mock_create_engine, mock_repo_class, mock_use_case_class, tmp_path
    ):
        mock_sessionmaker.return_value = _session_factory()
        mock_use_case = MagicMock()
        mock_use_case.execute = AsyncMock(
            return_value=Return.err(Error(code="LIST_BILLS_FAILED", message="Failed to load bills"))
        )
        mock_use_case_class.return_value = mock_use_case

        worker = BackupExportWorker(output_dir=str(tmp_path))

        with pytest.raises(RuntimeError, match="Failed to load bills"):
            await worker.run_once()
        assert os.listdir(tmp_path) == []


@pytest.mark.asyncio
class TestBackupExportWorkerShutdown:
    @patch("billflow.worker.backup_export.create_async_engine")
    async def test_disposes_engine(self, mock_create_engine):
        engine = MagicMock()
        engine.dispose = AsyncMock()
        mock_create_engine.return_value = engine

        worker = BackupExportWorker(db_uri="sqlite+aiosqlite:///./x.db")
        await worker.shutdown()

        engine.dispose.assert_called_once()
