import pytest_asyncio
from datetime import date
from decimal import Decimal
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.services.posting_locks import PostingLockRegistry
from src.depends import enable_sqlite_foreign_keys, get_session, get_posting_locks
from src.domain import (
    AttendanceRecord,
    AttendanceStatus,
    Beneficiary,
    DistributionRound,
    Project,
    ProjectBeneficiaryLink,
    ProjectBudget,
)


@pytest_asyncio.fixture(scope="function")
async def engine(tmp_path):
    """Test database engine on a throwaway SQLite file"""
    test_db_url = f"sqlite+aiosqlite:///{tmp_path / 'ledger_test.db'}"

    engine = create_async_engine(test_db_url, echo=False, future=True)
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """Create a new database session for each test"""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def posting_locks():
    return PostingLockRegistry()


@pytest_asyncio.fixture
async def seeded(db_session):
    """
    Two projects with budgets, three beneficiaries and rounds in two regions

    Project 1 (allocation 50000): rounds in Latakia (two attendees present)
    and Jableh (nobody attended). Project 2 (allocation 1000): one Jableh
    round with one attendee present.
    """
    p1 = Project(name="Winter shelter kits", donor="ECHO", start_date=date(2025, 1, 1))
    p2 = Project(name="Cash for food", donor="WFP", start_date=date(2025, 1, 1))
    db_session.add_all([p1, p2])
    await db_session.flush()

    db_session.add_all([
        ProjectBudget(project_id=p1.id, allocated_amount=Decimal("50000.00")),
        ProjectBudget(project_id=p2.id, allocated_amount=Decimal("1000.00")),
    ])

    b1 = Beneficiary(name="Rania Haddad", address="Latakia, Al-Ziraa", national_id="0801234567")
    b2 = Beneficiary(name="Omar Saleh", address="Latakia, Al-Sleibeh", national_id="0807654321")
    b3 = Beneficiary(name="Lina Khoury", address="Jableh, Al-Fayd", national_id="0809998887")
    db_session.add_all([b1, b2, b3])
    await db_session.flush()

    db_session.add_all([
        ProjectBeneficiaryLink(beneficiary_id=b1.id, project_id=p1.id),
        ProjectBeneficiaryLink(beneficiary_id=b2.id, project_id=p1.id),
        ProjectBeneficiaryLink(beneficiary_id=b3.id, project_id=p2.id),
    ])

    r_latakia = DistributionRound(project_id=p1.id, date=date(2025, 3, 1), location="Latakia")
    r_jableh_empty = DistributionRound(project_id=p1.id, date=date(2025, 3, 1), location="Jableh")
    r_jableh = DistributionRound(project_id=p2.id, date=date(2025, 3, 2), location="Jableh")
    db_session.add_all([r_latakia, r_jableh_empty, r_jableh])
    await db_session.flush()

    db_session.add_all([
        AttendanceRecord(round_id=r_latakia.id, beneficiary_id=b1.id, status=AttendanceStatus.PRESENT),
        AttendanceRecord(round_id=r_latakia.id, beneficiary_id=b2.id, status=AttendanceStatus.PRESENT),
        AttendanceRecord(round_id=r_jableh.id, beneficiary_id=b3.id, status=AttendanceStatus.PRESENT),
        AttendanceRecord(round_id=r_jableh.id, beneficiary_id=b1.id, status=AttendanceStatus.ABSENT),
    ])
    await db_session.commit()

    return {
        "projects": (p1.id, p2.id),
        "beneficiaries": (b1.id, b2.id, b3.id),
        "rounds": {
            "latakia": r_latakia.id,
            "jableh_empty": r_jableh_empty.id,
            "jableh": r_jableh.id,
        },
    }


@pytest_asyncio.fixture
async def client(db_session, posting_locks):
    """Create test client with database session override"""
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_posting_locks] = lambda: posting_locks

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
