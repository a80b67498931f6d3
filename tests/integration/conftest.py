import pytest_asyncio
from decimal import Decimal
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from billflow.adapter.services.drive_service import DisabledDriveSyncService
from billflow.depends import get_drive_sync_service, get_session
from billflow.domain.base import utc_now
from billflow.domain.bill import Bill, BillItem
from billflow.domain.bill_draft import BillDraft


@pytest_asyncio.fixture(scope="function")
async def engine(tmp_path):
    """Create test database engine on a temporary SQLite file"""
    test_db_url = f"sqlite+aiosqlite:///{tmp_path / 'billflow_test.db'}"

    engine = create_async_engine(test_db_url, echo=False, future=True)

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    """Create a new database session for each test"""
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def drive_service():
    """Drive sync used by the API; tests may replace it"""
    return DisabledDriveSyncService()


@pytest_asyncio.fixture
async def app(db_session, drive_service):
    from billflow.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    # Override the session dependency to use test session
    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_drive_sync_service] = lambda: drive_service
    return app


@pytest_asyncio.fixture
async def client(app):
    """Create test client with database session override"""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def make_bill(db_session):
    """Insert a saved bill built from a recomputed draft"""

    async def _make_bill(invoice_no, invoice_date, buyer_name="Acme Engineering Works",
                         quantity="10", rate="150.00", **extra):
        draft = BillDraft(
            invoice_no=invoice_no,
            invoice_date=invoice_date,
            buyer_name=buyer_name,
            buyer_gstin=extra.pop("buyer_gstin", "33AAAAA0000A1Z5"),
            items=[BillItem(sno=1, description="PU Roller 50mm", hsn_code="3926",
                            quantity=Decimal(quantity), rate=Decimal(rate))],
        ).with_totals()
        bill = Bill(**{**draft.to_record(), **extra})
        bill.created_at = utc_now()
        bill.updated_at = bill.created_at
        db_session.add(bill)
        await db_session.commit()
        await db_session.refresh(bill)
        return bill

    return _make_bill
