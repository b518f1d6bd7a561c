"""SQLAlchemy implementation of AggregateRepository

Rebuilds each aggregate as DELETE + INSERT ... SELECT inside the caller's
transaction. Readers on other connections keep seeing the committed
previous contents until the caller commits; a rollback leaves them intact.
On PostgreSQL a rebuild first takes an EXCLUSIVE table lock, so a second
rebuild waits and then deletes the rows the first one committed.
"""

from datetime import date
from typing import List, Optional
from sqlalchemy import and_, case, delete, distinct, insert, text
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.aggregate_repository import AggregateRepository
from src.app.services.region_gate import RegionGate
from src.domain.base import utc_now
from src.domain.aggregates import (
    AggregateRefresh,
    DailySpendAggregate,
    DailyDistributionSummary,
    RoundAttendanceAggregate,
)
from src.domain.distribution_round import DistributionRound, AttendanceRecord, AttendanceStatus
from src.domain.payment_posting import PaymentPosting, ApprovalStatus

_REBUILD_TABLES = frozenset(
    model.__tablename__
    for model in (DailySpendAggregate, RoundAttendanceAggregate, DailyDistributionSummary)
)


class SqlAlchemyAggregateRepository(AggregateRepository):
    """
    SQLAlchemy implementation of AggregateRepository

    Features:
    - Full replace, never incremental
    - Source queries are the aggregate definitions
    - Gated reads join back to live rounds for the region check
    """

    def __init__(self, session: AsyncSession, region_gate: Optional[RegionGate] = None):
        self.session = session
        self.region_gate = region_gate or RegionGate()

    async def lock_for_rebuild(self, name: str) -> None:
        if name not in _REBUILD_TABLES:
            raise ValueError(f"Unknown aggregate: {name}")
        connection = await self.session.connection()
        if connection.dialect.name != "postgresql":
            # SQLite already admits a single writer per database
            return
        # EXCLUSIVE conflicts with other writers but not with plain SELECTs
        await self.session.execute(text(f"LOCK TABLE {name} IN EXCLUSIVE MODE"))

    async def _replace(self, model, columns: List[str], source) -> int:
        table = model.__table__
        await self.session.execute(delete(table))
        await self.session.execute(insert(table).from_select(columns, source))
        count_result = await self.session.execute(select(func.count()).select_from(table))
        return count_result.scalar_one()

    async def replace_daily_spend(self) -> int:
        source = (
            select(
                PaymentPosting.project_id,
                PaymentPosting.date,
                func.sum(PaymentPosting.amount),
                func.count(),
            )
            .where(PaymentPosting.approval_status == ApprovalStatus.ADMIN_APPROVED)
            .group_by(PaymentPosting.project_id, PaymentPosting.date)
        )
        return await self._replace(
            DailySpendAggregate,
            ["project_id", "pay_date", "total_spent", "payments_count"],
            source,
        )

    async def replace_round_attendance(self) -> int:
        # LEFT JOIN: rounds without attendance rows still produce a 0 row
        present = case((AttendanceRecord.status == AttendanceStatus.PRESENT, 1), else_=0)
        source = (
            select(
                DistributionRound.id,
                DistributionRound.project_id,
                func.coalesce(func.sum(present), 0),
            )
            .select_from(DistributionRound)
            .outerjoin(AttendanceRecord, AttendanceRecord.round_id == DistributionRound.id)
            .group_by(DistributionRound.id, DistributionRound.project_id)
        )
        return await self._replace(
            RoundAttendanceAggregate,
            ["round_id", "project_id", "actual_present"],
            source,
        )

    async def replace_distribution_summary(self) -> int:
        source = (
            select(
                DistributionRound.date,
                DistributionRound.project_id,
                DistributionRound.location,
                func.count(distinct(AttendanceRecord.beneficiary_id)),
                func.count(distinct(DistributionRound.id)),
            )
            .select_from(DistributionRound)
            .outerjoin(
                AttendanceRecord,
                and_(
                    AttendanceRecord.round_id == DistributionRound.id,
                    AttendanceRecord.status == AttendanceStatus.PRESENT,
                ),
            )
            .group_by(DistributionRound.date, DistributionRound.project_id, DistributionRound.location)
        )
        return await self._replace(
            DailyDistributionSummary,
            ["dist_date", "project_id", "location", "beneficiaries_served", "rounds_count"],
            source,
        )

    async def record_refresh(self, name: str, row_count: int, duration_ms: int) -> AggregateRefresh:
        refresh = await self.session.get(AggregateRefresh, name)
        if refresh is None:
            refresh = AggregateRefresh(name=name)

        refresh.refreshed_at = utc_now()
        refresh.row_count = row_count
        refresh.duration_ms = duration_ms
        self.session.add(refresh)
        await self.session.flush()
        return refresh

    async def get_refresh(self, name: str) -> Optional[AggregateRefresh]:
        stmt = select(AggregateRefresh).where(AggregateRefresh.name == name).execution_options(
            populate_existing=True
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_daily_spend(
        self,
        project_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[DailySpendAggregate]:
        stmt = select(DailySpendAggregate).where(DailySpendAggregate.project_id == project_id)
        if start_date is not None:
            stmt = stmt.where(DailySpendAggregate.pay_date >= start_date)
        if end_date is not None:
            stmt = stmt.where(DailySpendAggregate.pay_date <= end_date)
        stmt = stmt.order_by(DailySpendAggregate.pay_date)
        # Rebuilds replace rows under the same keys; never serve stale identity-map copies
        stmt = stmt.execution_options(populate_existing=True)

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_round_attendance(
        self, caller_region: Optional[str], project_id: Optional[int] = None
    ) -> List[RoundAttendanceAggregate]:
        stmt = (
            select(RoundAttendanceAggregate)
            .join(DistributionRound, DistributionRound.id == RoundAttendanceAggregate.round_id)
            .where(self.region_gate.round_predicate(DistributionRound.location, caller_region))
        )
        if project_id is not None:
            stmt = stmt.where(RoundAttendanceAggregate.project_id == project_id)
        stmt = stmt.order_by(RoundAttendanceAggregate.round_id).execution_options(populate_existing=True)

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_distribution_summary(
        self,
        caller_region: Optional[str],
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[DailyDistributionSummary]:
        stmt = select(DailyDistributionSummary).where(
            self.region_gate.round_predicate(DailyDistributionSummary.location, caller_region)
        )
        if start_date is not None:
            stmt = stmt.where(DailyDistributionSummary.dist_date >= start_date)
        if end_date is not None:
            stmt = stmt.where(DailyDistributionSummary.dist_date <= end_date)
        stmt = stmt.order_by(
            DailyDistributionSummary.dist_date,
            DailyDistributionSummary.project_id,
        ).execution_options(populate_existing=True)

        result = await self.session.execute(stmt)
        return list(result.scalars().all())
