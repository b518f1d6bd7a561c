"""Schema Provisioning

Creates the ledger tables on MIGRATION_DB_URI, which normally carries a
role allowed to run DDL, and can load the sample dataset used for demos
and smoke tests. Runs before the API or the workers are started.
"""

import asyncio
import logging
from datetime import date
from decimal import Decimal
from typing import Dict, Optional
from sqlalchemy import func
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.repositories import SqlAlchemyAggregateRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.aggregates import RebuildAggregates
from src.depends import enable_sqlite_foreign_keys
from src.domain import (
    ApprovalStatus,
    AttendanceRecord,
    AttendanceStatus,
    Beneficiary,
    Complaint,
    ComplaintStatus,
    DistributionRound,
    PaymentPosting,
    Project,
    ProjectBeneficiaryLink,
    ProjectBudget,
)

logger = logging.getLogger(__name__)


class SchemaManager:
    """
    Creates the ledger schema and loads sample data

    Usage:
        manager = SchemaManager()
        await manager.create_schema()
        await manager.seed_sample_data()
    """

    def __init__(self, db_uri: Optional[str] = None):
        self.db_uri = db_uri or ApplicationConfig.MIGRATION_DB_URI

        self.engine = create_async_engine(self.db_uri, echo=False, future=True)
        enable_sqlite_foreign_keys(self.engine)
        self.async_session_factory = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )

    async def create_schema(self) -> None:
        """Create every missing table; existing tables are left untouched"""
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
        logger.info(f"Schema ready: {len(SQLModel.metadata.tables)} tables")

    async def drop_schema(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.drop_all)
        logger.warning("Schema dropped")

    async def seed_sample_data(self) -> Dict[str, int]:
        """
        Load the sample dataset and rebuild the aggregates from it

        Skipped when the store already holds projects, so running it twice
        does not duplicate rows.

        Returns:
            Number of rows inserted per table (empty when skipped)
        """
        async with self.async_session_factory() as session:
            existing = (await session.execute(select(func.count()).select_from(Project))).scalar_one()
            if existing:
                logger.info(f"Store already holds {existing} projects, skipping sample data")
                return {}

            counts = await self._insert_sample_rows(session)
            await session.commit()

            result = await RebuildAggregates(
                SqlAlchemyUnitOfWork(session), SqlAlchemyAggregateRepository(session)
            ).execute()
            if result.is_err():
                raise RuntimeError(f"Sample aggregate rebuild failed: {result.error.reason}")

        logger.info(f"Sample data loaded: {counts}")
        return counts

    async def _insert_sample_rows(self, session: AsyncSession) -> Dict[str, int]:
        food = Project(
            name="Food Assistance", donor="WFP",
            start_date=date(2025, 1, 1), end_date=date(2025, 12, 31),
        )
        winter = Project(
            name="Winterization Support", donor="UNHCR",
            start_date=date(2025, 11, 1), end_date=date(2026, 3, 1),
        )
        session.add_all([food, winter])

        ahmad = Beneficiary(name="Ahmad Ali", address="Latakia - Al-Slaybeh",
                            national_id="A123456", phone="099112233")
        sara = Beneficiary(name="Sara Hassan", address="Latakia - Al-Raml",
                           national_id="B987654", phone="099445566")
        yousef = Beneficiary(name="Yousef Ibrahim", address="Jableh - City Center",
                             national_id="C555777", phone="099778899")
        maya = Beneficiary(name="Maya Khaled", address="Latakia - Mashroua",
                           national_id="D222333", phone="099667788")
        session.add_all([ahmad, sara, yousef, maya])
        await session.flush()

        links = [
            ProjectBeneficiaryLink(beneficiary_id=ahmad.id, project_id=food.id),
            ProjectBeneficiaryLink(beneficiary_id=sara.id, project_id=food.id),
            ProjectBeneficiaryLink(beneficiary_id=maya.id, project_id=food.id),
            ProjectBeneficiaryLink(beneficiary_id=yousef.id, project_id=winter.id),
        ]

        first_round = DistributionRound(project_id=food.id, date=date(2025, 1, 10), location="Latakia")
        second_round = DistributionRound(project_id=food.id, date=date(2025, 1, 15), location="Latakia")
        winter_round = DistributionRound(project_id=winter.id, date=date(2025, 12, 1), location="Jableh")
        rounds = [first_round, second_round, winter_round]
        session.add_all(links + rounds)
        await session.flush()

        present, absent = AttendanceStatus.PRESENT, AttendanceStatus.ABSENT
        attendance = [
            AttendanceRecord(round_id=first_round.id, beneficiary_id=ahmad.id, status=present),
            AttendanceRecord(round_id=first_round.id, beneficiary_id=sara.id, status=present),
            AttendanceRecord(round_id=first_round.id, beneficiary_id=maya.id, status=absent),
            AttendanceRecord(round_id=second_round.id, beneficiary_id=ahmad.id, status=present),
            AttendanceRecord(round_id=second_round.id, beneficiary_id=maya.id, status=present),
            AttendanceRecord(round_id=winter_round.id, beneficiary_id=yousef.id, status=present),
        ]

        complaints = [
            Complaint(beneficiary_id=ahmad.id, project_id=food.id,
                      description="Did not receive full food basket", status=ComplaintStatus.PENDING),
            Complaint(beneficiary_id=maya.id, project_id=food.id,
                      description="Incorrect family size recorded", status=ComplaintStatus.VALID),
        ]

        budgets = [
            ProjectBudget(project_id=food.id, allocated_amount=Decimal("50000.00")),
            ProjectBudget(project_id=winter.id, allocated_amount=Decimal("30000.00")),
        ]

        # Within both allocations, so loading them directly keeps approved <= allocated
        approved = ApprovalStatus.ADMIN_APPROVED
        payments = [
            PaymentPosting(invoice_id=101, project_id=food.id, amount=Decimal("5000.00"),
                           approval_status=approved, date=date(2025, 1, 10)),
            PaymentPosting(invoice_id=102, project_id=food.id, amount=Decimal("2500.00"),
                           approval_status=approved, date=date(2025, 1, 15)),
            PaymentPosting(invoice_id=201, project_id=winter.id, amount=Decimal("4000.00"),
                           approval_status=approved, date=date(2025, 12, 1)),
        ]

        session.add_all(attendance + complaints + budgets + payments)
        await session.flush()

        return {
            "projects": 2,
            "beneficiaries": 4,
            "beneficiary_projects": len(links),
            "distribution_rounds": len(rounds),
            "attendance": len(attendance),
            "complaints": len(complaints),
            "project_budgets": len(budgets),
            "payments": len(payments),
        }

    async def shutdown(self):
        await self.engine.dispose()


async def main():
    """
    Usage:
        python -m src.worker.schema_manager --init-db
        python -m src.worker.schema_manager --init-db --seed
        python -m src.worker.schema_manager --drop --init-db
    """
    import argparse

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Ledger schema provisioning")
    parser.add_argument("--init-db", action="store_true", help="Create missing tables")
    parser.add_argument("--seed", action="store_true", help="Load the sample dataset")
    parser.add_argument("--drop", action="store_true", help="Drop every ledger table first")
    parser.add_argument("--db-uri", default=None, help="Override MIGRATION_DB_URI")
    args = parser.parse_args()

    if not (args.init_db or args.seed or args.drop):
        parser.error("nothing to do: pass --init-db, --seed or --drop")

    manager = SchemaManager(db_uri=args.db_uri)

    try:
        if args.drop:
            await manager.drop_schema()
        if args.init_db:
            await manager.create_schema()
        if args.seed:
            counts = await manager.seed_sample_data()
            for table, count in counts.items():
                print(f"  {table}: {count} rows")
    finally:
        await manager.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
