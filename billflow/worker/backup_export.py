"""Bill Backup Background Worker

Writes a CSV backup of every bill to the configured output directory.
Can be run as a standalone script or integrated with a scheduler.
"""

import asyncio
import logging
import os
from datetime import date
from typing import Optional
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from billflow.adapter.repositories.bill_repository import SqlAlchemyBillRepository
from billflow.app.use_cases.billing import ExportBillsCsv

logger = logging.getLogger(__name__)


class BackupExportWorker:
    """
    Background worker for CSV backups

    Features:
    - Exports every bill (billflow_backup_YYYY-MM-DD.csv)
    - Overwrites the same day's file when re-run
    - Can run once or continuously

    Usage:
        # Run once
        worker = BackupExportWorker()
        path = await worker.run_once()

        # Run continuously
        worker = BackupExportWorker()
        await worker.run_forever(interval_seconds=86400)  # Daily
    """

    def __init__(
        self,
        db_uri: Optional[str] = None,
        output_dir: Optional[str] = None,
    ):
        """
        Initialize the worker

        Args:
            db_uri: Database URI (defaults to ApplicationConfig.DB_URI)
            output_dir: Backup directory (defaults to ApplicationConfig.BACKUP_OUTPUT_DIR)
        """
        self.db_uri = db_uri or ApplicationConfig.DB_URI
        self.output_dir = output_dir or ApplicationConfig.BACKUP_OUTPUT_DIR

        # Create engine and session factory
        self.engine = create_async_engine(self.db_uri, echo=False, future=True)
        self.async_session_factory = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )

        logger.info("BackupExportWorker initialized")

    async def run_once(self, today: Optional[date] = None) -> str:
        """
        Write one backup file

        Args:
            today: Date used in the file name (defaults to today)

        Returns:
            Path of the written file
        """
        async with self.async_session_factory() as session:
            use_case = ExportBillsCsv(SqlAlchemyBillRepository(session))
            result = await use_case.execute(today=today)

        if result.is_err():
            logger.error(f"Backup failed: {result.error.message}")
            raise RuntimeError(f"Backup failed: {result.error.message}")

        export = result.value
        os.makedirs(self.output_dir, exist_ok=True)
        path = os.path.join(self.output_dir, export.filename)
        with open(path, "w", encoding="utf-8", newline="") as w_file:
            w_file.write(export.content)

        logger.info(f"Backed up {export.row_count} bills to {path}")
        return path

    async def run_forever(self, interval_seconds: int = 86400):
        """
        Write backups continuously at specified interval

        Args:
            interval_seconds: Seconds between backups (default: 24 hours)
        """
        logger.info(f"Starting continuous bill backup with {interval_seconds}s interval")

        while True:
            try:
                await self.run_once()
            except Exception as e:
                logger.error(f"Backup cycle failed: {e}")

            await asyncio.sleep(interval_seconds)

    async def shutdown(self):
        """Cleanup resources"""
        await self.engine.dispose()
        logger.info("BackupExportWorker shutdown complete")


async def main():
    """
    Entry point for running the worker as a standalone script

    Usage:
        # Run once
        python -m billflow.worker.backup_export --once

        # Run continuously (default: daily)
        python -m billflow.worker.backup_export

        # Custom output directory
        python -m billflow.worker.backup_export --once --output-dir backups
    """
    import argparse

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Bill Backup Worker")
    parser.add_argument(
        "--once", action="store_true", help="Run once and exit"
    )
    parser.add_argument(
        "--interval", type=int, default=86400,
        help="Interval between runs in seconds (default: 86400 = 24 hours)"
    )
    parser.add_argument(
        "--output-dir", default=None,
        help="Directory for backup files (default: BACKUP_OUTPUT_DIR)"
    )
    args = parser.parse_args()

    worker = BackupExportWorker(output_dir=args.output_dir)

    try:
        if args.once:
            path = await worker.run_once()
            print(f"Backup written to {path}")
        else:
            await worker.run_forever(interval_seconds=args.interval)
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")
    finally:
        await worker.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
