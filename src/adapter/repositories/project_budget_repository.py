"""SQLAlchemy implementation of ProjectBudgetRepository

Provides persistence for ProjectBudget entities with pessimistic locking
support so approved postings on one project are checked one at a time.
"""

from decimal import Decimal
from typing import List, Optional, Tuple
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.project_budget_repository import ProjectBudgetRepository
from src.domain.payment_posting import PaymentPosting, ApprovalStatus
from src.domain.project_budget import ProjectBudget


class SqlAlchemyProjectBudgetRepository(ProjectBudgetRepository):
    """
    SQLAlchemy implementation of ProjectBudgetRepository

    Features:
    - Pessimistic locking via SELECT FOR UPDATE on the budget row
    - The lock is held until the enclosing transaction commits or rolls back
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_project_id(self, project_id: int, for_update: bool = False) -> Optional[ProjectBudget]:
        """
        Retrieve budget by project ID with optional row-level locking

        Args:
            project_id: Project identifier
            for_update: If True, locks the row with SELECT FOR UPDATE (prevents concurrent checks)

        Returns:
            ProjectBudget if found, None otherwise
        """
        stmt = select(ProjectBudget).where(ProjectBudget.project_id == project_id)

        if for_update:
            stmt = stmt.with_for_update()

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_all(self) -> List[ProjectBudget]:
        stmt = select(ProjectBudget).order_by(ProjectBudget.project_id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_spend_position(self, project_id: int) -> Optional[Tuple[Decimal, Decimal]]:
        approved_total = (
            select(func.coalesce(func.sum(PaymentPosting.amount), 0))
            .where(
                PaymentPosting.project_id == ProjectBudget.project_id,
                PaymentPosting.approval_status == ApprovalStatus.ADMIN_APPROVED,
            )
            .scalar_subquery()
        )
        stmt = select(ProjectBudget.allocated_amount, approved_total).where(
            ProjectBudget.project_id == project_id
        )
        result = await self.session.execute(stmt)
        row = result.first()
        if row is None:
            return None

        allocated_amount, approved = row
        return Decimal(allocated_amount), Decimal(approved or 0)
