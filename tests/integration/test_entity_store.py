"""Integration tests for the entity store schema"""

import pytest
from datetime import date
from decimal import Decimal

from sqlalchemy import func, select, text
from sqlalchemy.exc import IntegrityError

from src.domain import (
    ApprovalStatus,
    AttendanceRecord,
    Complaint,
    DistributionRound,
    PaymentPosting,
    Project,
    ProjectBudget,
)


async def count(session, model):
    result = await session.execute(select(func.count()).select_from(model))
    return result.scalar_one()


class TestCascades:

    @pytest.mark.asyncio
    async def test_deleting_project_removes_dependents(self, db_session, seeded):
        p1, _ = seeded["projects"]
        b1 = seeded["beneficiaries"][0]
        db_session.add(PaymentPosting(project_id=p1, amount=Decimal("10.00"), date=date(2025, 3, 1)))
        db_session.add(Complaint(beneficiary_id=b1, project_id=p1, description="Late delivery"))
        await db_session.commit()

        project = await db_session.get(Project, p1)
        await db_session.delete(project)
        await db_session.commit()
        db_session.expunge_all()

        assert await count(db_session, ProjectBudget) == 1
        assert await count(db_session, PaymentPosting) == 0
        assert await count(db_session, Complaint) == 0
        # Only project 2's Jableh round and its two attendance rows remain
        assert await count(db_session, DistributionRound) == 1
        assert await count(db_session, AttendanceRecord) == 2


class TestConstraints:

    @pytest.mark.asyncio
    async def test_one_budget_per_project(self, db_session, seeded):
        p1, _ = seeded["projects"]
        db_session.add(ProjectBudget(project_id=p1, allocated_amount=Decimal("1.00")))

        with pytest.raises(IntegrityError):
            await db_session.commit()
        await db_session.rollback()

    @pytest.mark.asyncio
    async def test_posting_amount_must_be_positive(self, db_session, seeded):
        p1, _ = seeded["projects"]
        db_session.add(PaymentPosting(project_id=p1, amount=Decimal("0"), date=date(2025, 3, 1)))

        with pytest.raises(IntegrityError):
            await db_session.commit()
        await db_session.rollback()


class TestStoredValues:

    @pytest.mark.asyncio
    async def test_enums_are_stored_as_lowercase_values(self, db_session, seeded):
        p1, _ = seeded["projects"]
        db_session.add(
            PaymentPosting(
                project_id=p1,
                amount=Decimal("10.00"),
                date=date(2025, 3, 1),
                approval_status=ApprovalStatus.ADMIN_APPROVED,
            )
        )
        await db_session.commit()

        statuses = (await db_session.execute(text("SELECT approval_status FROM payments"))).scalars().all()
        attendance = (
            await db_session.execute(text("SELECT DISTINCT status FROM attendance ORDER BY status"))
        ).scalars().all()

        assert statuses == ["admin_approved"]
        assert attendance == ["absent", "present"]

    @pytest.mark.asyncio
    async def test_status_defaults_to_pending_in_the_store(self, db_session, seeded):
        p1, _ = seeded["projects"]
        db_session.add(PaymentPosting(project_id=p1, amount=Decimal("10.00"), date=date(2025, 3, 1)))
        await db_session.commit()

        stored = (await db_session.execute(text("SELECT approval_status FROM payments"))).scalar_one()
        posting = (await db_session.execute(select(PaymentPosting))).scalar_one()

        assert stored == "pending"
        assert posting.approval_status == ApprovalStatus.PENDING
