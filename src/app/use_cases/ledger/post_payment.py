"""PostPayment Use Case

Posts a payment against a project budget. Approved postings are checked
against the allocation and inserted as one atomic unit so that no two
concurrent postings can both pass the check and together overspend.
"""

import logging
from datetime import date
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.posting_locks import PostingLockRegistry
from src.app.repositories.project_budget_repository import ProjectBudgetRepository
from src.app.repositories.payment_posting_repository import PaymentPostingRepository
from src.app.use_cases import error_codes
from src.domain.payment_posting import PaymentPosting, ApprovalStatus
from .concurrency import is_concurrency_conflict
from .dtos import PostPaymentCommandDTO, PaymentPostingResponseDTO

logger = logging.getLogger(__name__)


class PostPayment:
    """
    Use Case: Post a payment against a project budget

    Business Rules:
    1. The project must have a ProjectBudget (NO_BUDGET_DEFINED otherwise)
    2. Approved postings: approved_sum + amount <= allocated_amount
       (BUDGET_EXCEEDED otherwise, nothing is inserted)
    3. Pending/rejected postings are recorded without the sum check
    4. Serialization: per-project lock held across check, insert and commit,
       plus SELECT FOR UPDATE on the budget row

    Flow:
    1. Acquire the project's posting lock
    2. Get budget with lock (SELECT FOR UPDATE)
    3. Read current approved sum
    4. Validate the allocation (approved postings only)
    5. Insert posting
    6. Commit transaction
    7. Return response
    """

    def __init__(
        self,
        uow: UnitOfWork,
        budget_repo: ProjectBudgetRepository,
        payment_repo: PaymentPostingRepository,
        posting_locks: PostingLockRegistry,
    ):
        self.uow = uow
        self.budget_repo = budget_repo
        self.payment_repo = payment_repo
        self.posting_locks = posting_locks

    async def execute(self, command: PostPaymentCommandDTO) -> Result[PaymentPostingResponseDTO]:
        """
        Execute payment posting

        Args:
            command: PostPaymentCommandDTO with project_id, amount, approval_status

        Returns:
            Result[PaymentPostingResponseDTO]: Success with posting details or error
        """
        async with self.posting_locks.lock_for(command.project_id):
            return await self._post(command)

    async def _post(self, command: PostPaymentCommandDTO) -> Result[PaymentPostingResponseDTO]:
        try:
            # Step 1: Get budget with pessimistic lock (SELECT FOR UPDATE)
            budget = await self.budget_repo.get_by_project_id(
                command.project_id, for_update=True
            )

            if not budget:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code=error_codes.NO_BUDGET_DEFINED,
                        message=f"No budget defined for project {command.project_id}",
                        reason="Project may not exist or its budget has not been allocated",
                    )
                )

            # Step 2: Current approved spend, read under the budget lock
            allocated_amount = budget.allocated_amount
            approved_sum = await self.payment_repo.get_approved_sum(command.project_id)
            is_approved = command.approval_status == ApprovalStatus.ADMIN_APPROVED

            # Step 3: Validate allocation for approved postings
            if is_approved and approved_sum + command.amount > allocated_amount:
                await self.uow.rollback()
                logger.warning(
                    f"Rejected approved posting for project {command.project_id}: "
                    f"approved={approved_sum}, amount={command.amount}, "
                    f"allocated={allocated_amount}"
                )
                return Return.err(
                    Error(
                        code=error_codes.BUDGET_EXCEEDED,
                        message="Payment exceeds remaining project budget",
                        reason=(
                            f"allocated={allocated_amount}, approved={approved_sum}, "
                            f"requested={command.amount}"
                        ),
                    )
                )

            # Step 4: Insert posting
            posting = PaymentPosting(
                invoice_id=command.invoice_id,
                project_id=command.project_id,
                amount=command.amount,
                date=command.date or date.today(),
                approval_status=command.approval_status,
            )
            created_posting = await self.payment_repo.create(posting)

            # Step 5: Commit transaction (releases the budget row lock)
            await self.uow.commit()

            approved_after = approved_sum + command.amount if is_approved else approved_sum
            response = PaymentPostingResponseDTO(
                payment_id=created_posting.id,
                invoice_id=created_posting.invoice_id,
                project_id=created_posting.project_id,
                amount=created_posting.amount,
                date=created_posting.date,
                approval_status=created_posting.approval_status.value,
                remaining_budget=allocated_amount - approved_after,
            )

            logger.info(
                f"Posted payment {created_posting.id} for project {command.project_id} "
                f"({command.approval_status.value}, amount={command.amount})"
            )
            return Return.ok(response)

        except Exception as e:
            await self.uow.rollback()
            if is_concurrency_conflict(e):
                logger.warning(f"Concurrency conflict posting to project {command.project_id}: {e}")
                return Return.err(
                    Error(
                        code=error_codes.CONCURRENCY_CONFLICT,
                        message="Posting conflicted with a concurrent transaction, retry",
                        reason=str(e),
                    )
                )
            return Return.err(
                Error(
                    code=error_codes.POST_PAYMENT_FAILED,
                    message="Failed to post payment",
                    reason=str(e),
                )
            )
