"""SQLAlchemy implementation of PaymentPostingRepository

Provides persistence for PaymentPosting entities and the approved-sum
queries the budget check runs inside the posting transaction.
"""

from decimal import Decimal
from typing import Dict, Optional
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.payment_posting_repository import PaymentPostingRepository
from src.domain.payment_posting import PaymentPosting, ApprovalStatus


class SqlAlchemyPaymentPostingRepository(PaymentPostingRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, posting: PaymentPosting) -> PaymentPosting:
        """
        Create a new payment posting

        Args:
            posting: PaymentPosting entity to persist

        Returns:
            Created PaymentPosting with generated ID

        Raises:
            IntegrityError: If the project does not exist or amount <= 0
        """
        self.session.add(posting)
        await self.session.flush()
        await self.session.refresh(posting)
        return posting

    async def get_by_id(self, payment_id: int, for_update: bool = False) -> Optional[PaymentPosting]:
        stmt = select(PaymentPosting).where(PaymentPosting.id == payment_id)

        if for_update:
            stmt = stmt.with_for_update()

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_approved_sum(self, project_id: int) -> Decimal:
        """
        Sum of approved amounts for a project

        Note:
            Must run in the same transaction that holds the budget row lock
            for the result to be usable by the budget check
        """
        stmt = select(func.coalesce(func.sum(PaymentPosting.amount), 0)).where(
            PaymentPosting.project_id == project_id,
            PaymentPosting.approval_status == ApprovalStatus.ADMIN_APPROVED,
        )
        result = await self.session.execute(stmt)
        return Decimal(result.scalar_one() or 0)

    async def get_approved_sums(self) -> Dict[int, Decimal]:
        stmt = (
            select(PaymentPosting.project_id, func.sum(PaymentPosting.amount))
            .where(PaymentPosting.approval_status == ApprovalStatus.ADMIN_APPROVED)
            .group_by(PaymentPosting.project_id)
        )
        result = await self.session.execute(stmt)
        return {project_id: Decimal(total) for project_id, total in result.all()}

    async def update_status(self, payment_id: int, status: ApprovalStatus) -> None:
        posting = await self.get_by_id(payment_id)
        if posting:
            posting.approval_status = status
            self.session.add(posting)
            await self.session.flush()
