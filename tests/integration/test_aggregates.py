"""Integration tests for aggregate maintenance

Tests cover:
- Approved posting shows up in daily spend after a rebuild
- Rebuild idempotence
- Rounds without attendance report zero present
- Distribution summary counts
- Failed rebuild keeps previous contents
- Concurrent rebuilds serialize and agree
"""

import asyncio
import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock

from sqlalchemy import select

from src.adapter.repositories import (
    SqlAlchemyAggregateRepository,
    SqlAlchemyPaymentPostingRepository,
    SqlAlchemyProjectBudgetRepository,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.aggregates import (
    ListDailySpend,
    RebuildAggregates,
    RebuildDailySpend,
)
from src.app.use_cases.ledger import PostPayment, PostPaymentCommandDTO
from src.domain import (
    AggregateName,
    ApprovalStatus,
    DailyDistributionSummary,
    DailySpendAggregate,
    RoundAttendanceAggregate,
)


async def rebuild_all(session):
    result = await RebuildAggregates(
        SqlAlchemyUnitOfWork(session), SqlAlchemyAggregateRepository(session)
    ).execute()
    assert result.is_ok(), result.error
    return result.value


async def post(session, posting_locks, project_id, amount, status=ApprovalStatus.ADMIN_APPROVED):
    result = await PostPayment(
        uow=SqlAlchemyUnitOfWork(session),
        budget_repo=SqlAlchemyProjectBudgetRepository(session),
        payment_repo=SqlAlchemyPaymentPostingRepository(session),
        posting_locks=posting_locks,
    ).execute(
        PostPaymentCommandDTO(
            project_id=project_id,
            amount=Decimal(amount),
            approval_status=status,
            date=date(2025, 3, 1),
        )
    )
    assert result.is_ok(), result.error
    return result.value


async def table_rows(session, model, *order_by):
    result = await session.execute(
        select(model).order_by(*order_by).execution_options(populate_existing=True)
    )
    return [row.model_dump() for row in result.scalars().all()]


class TestDailySpend:

    @pytest.mark.asyncio
    async def test_approved_posting_shows_in_daily_spend(self, db_session, seeded, posting_locks):
        """
        Given: an approved 5000 posting on 2025-03-01
        When: aggregates are rebuilt
        Then: daily spend for that date includes 5000
        """
        project_id = seeded["projects"][0]
        await post(db_session, posting_locks, project_id, "5000.00")
        await post(db_session, posting_locks, project_id, "1200.00", status=ApprovalStatus.PENDING)

        await rebuild_all(db_session)

        result = await ListDailySpend(SqlAlchemyAggregateRepository(db_session)).execute(project_id)
        assert result.is_ok()
        days = result.value.days
        assert len(days) == 1
        assert days[0].pay_date == date(2025, 3, 1)
        assert days[0].total_spent == Decimal("5000.00")
        assert days[0].payments_count == 1
        assert result.value.as_of is not None

    @pytest.mark.asyncio
    async def test_daily_spend_is_stale_until_rebuilt(self, db_session, seeded, posting_locks):
        project_id = seeded["projects"][0]
        await post(db_session, posting_locks, project_id, "100.00")
        await rebuild_all(db_session)
        await post(db_session, posting_locks, project_id, "50.00")

        reader = ListDailySpend(SqlAlchemyAggregateRepository(db_session))
        before = await reader.execute(project_id)
        assert before.value.days[0].total_spent == Decimal("100.00")

        await rebuild_all(db_session)
        after = await reader.execute(project_id)
        assert after.value.days[0].total_spent == Decimal("150.00")
        assert after.value.days[0].payments_count == 2

    @pytest.mark.asyncio
    async def test_never_rebuilt_has_no_as_of(self, db_session, seeded):
        result = await ListDailySpend(SqlAlchemyAggregateRepository(db_session)).execute(
            seeded["projects"][0]
        )
        assert result.value.days == []
        assert result.value.as_of is None


class TestRebuildIdempotence:

    @pytest.mark.asyncio
    async def test_rebuild_twice_yields_identical_contents(self, db_session, seeded, posting_locks):
        p1, p2 = seeded["projects"]
        await post(db_session, posting_locks, p1, "5000.00")
        await post(db_session, posting_locks, p2, "250.00")

        await rebuild_all(db_session)
        first = (
            await table_rows(db_session, DailySpendAggregate, DailySpendAggregate.project_id),
            await table_rows(db_session, RoundAttendanceAggregate, RoundAttendanceAggregate.round_id),
            await table_rows(
                db_session, DailyDistributionSummary,
                DailyDistributionSummary.dist_date, DailyDistributionSummary.location,
            ),
        )

        await rebuild_all(db_session)
        second = (
            await table_rows(db_session, DailySpendAggregate, DailySpendAggregate.project_id),
            await table_rows(db_session, RoundAttendanceAggregate, RoundAttendanceAggregate.round_id),
            await table_rows(
                db_session, DailyDistributionSummary,
                DailyDistributionSummary.dist_date, DailyDistributionSummary.location,
            ),
        )

        assert first == second
        assert len(first[0]) == 2


class TestAttendanceAggregates:

    @pytest.mark.asyncio
    async def test_round_attendance_counts_present(self, db_session, seeded):
        await rebuild_all(db_session)

        rows = {
            row["round_id"]: row["actual_present"]
            for row in await table_rows(
                db_session, RoundAttendanceAggregate, RoundAttendanceAggregate.round_id
            )
        }

        rounds = seeded["rounds"]
        assert rows[rounds["latakia"]] == 2
        assert rows[rounds["jableh"]] == 1
        # Round without any attendance rows still reports 0
        assert rows[rounds["jableh_empty"]] == 0

    @pytest.mark.asyncio
    async def test_distribution_summary(self, db_session, seeded):
        await rebuild_all(db_session)
        p1, p2 = seeded["projects"]

        rows = {
            (row["dist_date"], row["project_id"], row["location"]): row
            for row in await table_rows(
                db_session, DailyDistributionSummary, DailyDistributionSummary.dist_date
            )
        }

        assert len(rows) == 3
        latakia = rows[(date(2025, 3, 1), p1, "Latakia")]
        assert latakia["beneficiaries_served"] == 2
        assert latakia["rounds_count"] == 1
        empty = rows[(date(2025, 3, 1), p1, "Jableh")]
        assert empty["beneficiaries_served"] == 0
        assert empty["rounds_count"] == 1
        assert rows[(date(2025, 3, 2), p2, "Jableh")]["beneficiaries_served"] == 1


class TestFailedRebuild:

    @pytest.mark.asyncio
    async def test_failed_rebuild_keeps_previous_contents(self, db_session, seeded, posting_locks):
        project_id = seeded["projects"][0]
        await post(db_session, posting_locks, project_id, "300.00")
        await rebuild_all(db_session)
        await post(db_session, posting_locks, project_id, "700.00")

        repo = SqlAlchemyAggregateRepository(db_session)
        real_record_refresh = repo.record_refresh
        # Contents are replaced, then the refresh marker write fails
        repo.record_refresh = AsyncMock(side_effect=RuntimeError("marker write failed"))

        result = await RebuildDailySpend(SqlAlchemyUnitOfWork(db_session), repo).execute()

        assert result.is_err()
        assert result.error.code == "AGGREGATE_REBUILD_FAILED"

        repo.record_refresh = real_record_refresh
        rows = await table_rows(db_session, DailySpendAggregate, DailySpendAggregate.project_id)
        assert len(rows) == 1
        assert rows[0]["total_spent"] == Decimal("300.00")

        refresh = await repo.get_refresh(AggregateName.DAILY_SPEND)
        assert refresh.row_count == 1


class TestConcurrentRebuilds:

    @pytest.mark.asyncio
    async def test_concurrent_rebuilds_all_commit_same_contents(
        self, session_factory, seeded, posting_locks
    ):
        """
        Given: approved postings on both projects
        When: four full rebuilds race through separate sessions
        Then: every rebuild commits and the tables match a single rebuild
        """
        p1, p2 = seeded["projects"]
        async with session_factory() as session:
            await post(session, posting_locks, p1, "5000.00")
            await post(session, posting_locks, p2, "250.00")

        async def rebuild_in_own_session():
            async with session_factory() as session:
                return await RebuildAggregates(
                    SqlAlchemyUnitOfWork(session), SqlAlchemyAggregateRepository(session)
                ).execute()

        results = await asyncio.gather(*(rebuild_in_own_session() for _ in range(4)))

        assert all(r.is_ok() for r in results), [r.error for r in results if r.is_err()]

        async with session_factory() as session:
            spend = await table_rows(session, DailySpendAggregate, DailySpendAggregate.project_id)
            attendance = await table_rows(
                session, RoundAttendanceAggregate, RoundAttendanceAggregate.round_id
            )
            refresh = await SqlAlchemyAggregateRepository(session).get_refresh(
                AggregateName.DAILY_SPEND
            )

        assert [(r["project_id"], r["total_spent"]) for r in spend] == [
            (p1, Decimal("5000.00")),
            (p2, Decimal("250.00")),
        ]
        assert len(attendance) == 3
        assert refresh.row_count == 2
