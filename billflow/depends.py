from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from billflow.adapter.services.pdf_service import ReportLabPdfService
from billflow.adapter.services.drive_service import create_drive_sync_service
from billflow.app.services.drive_service import DriveSyncService
from billflow.app.services.pdf_service import PdfService
from billflow.domain.company import CompanyProfile

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


def get_company_profile() -> CompanyProfile:
    return ApplicationConfig.COMPANY


def get_pdf_service() -> PdfService:
    return ReportLabPdfService()


def get_drive_sync_service() -> DriveSyncService:
    return create_drive_sync_service(
        ApplicationConfig.GOOGLE_SCRIPT_URL,
        timeout=ApplicationConfig.DRIVE_SYNC_TIMEOUT,
    )
