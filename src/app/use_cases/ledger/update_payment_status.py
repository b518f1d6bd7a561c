"""UpdatePaymentStatus Use Case

Moves a pending posting to admin_approved or rejected. Approving re-runs
the budget check under the same serialization as PostPayment, so a
posting recorded as pending cannot later push a project over budget.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.posting_locks import PostingLockRegistry
from src.app.repositories.project_budget_repository import ProjectBudgetRepository
from src.app.repositories.payment_posting_repository import PaymentPostingRepository
from src.app.use_cases import error_codes
from src.domain.payment_posting import ApprovalStatus
from .concurrency import is_concurrency_conflict
from .dtos import UpdatePaymentStatusCommandDTO, PaymentPostingResponseDTO

logger = logging.getLogger(__name__)


class UpdatePaymentStatus:
    """
    Use Case: Approval status transition

    Business Rules:
    1. Only pending postings transition
    2. Target must be admin_approved or rejected
    3. Approval requires approved_sum + amount <= allocated_amount
    4. Same per-project lock and budget row lock as PostPayment
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

    async def execute(self, command: UpdatePaymentStatusCommandDTO) -> Result[PaymentPostingResponseDTO]:
        if command.approval_status == ApprovalStatus.PENDING:
            return Return.err(
                Error(
                    code=error_codes.INVALID_STATUS_TRANSITION,
                    message="Postings can only transition to admin_approved or rejected",
                )
            )

        # Unlocked read to learn which project's lock to take
        posting = await self.payment_repo.get_by_id(command.payment_id)
        if not posting:
            return Return.err(
                Error(
                    code=error_codes.PAYMENT_NOT_FOUND,
                    message=f"Payment {command.payment_id} not found",
                )
            )
        project_id = posting.project_id
        await self.uow.rollback()

        async with self.posting_locks.lock_for(project_id):
            return await self._transition(command, project_id)

    async def _transition(
        self, command: UpdatePaymentStatusCommandDTO, project_id: int
    ) -> Result[PaymentPostingResponseDTO]:
        try:
            budget = await self.budget_repo.get_by_project_id(project_id, for_update=True)
            posting = await self.payment_repo.get_by_id(command.payment_id, for_update=True)

            if not posting:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code=error_codes.PAYMENT_NOT_FOUND,
                        message=f"Payment {command.payment_id} not found",
                    )
                )

            if posting.approval_status != ApprovalStatus.PENDING:
                current_status = posting.approval_status.value
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code=error_codes.INVALID_STATUS_TRANSITION,
                        message=f"Payment {command.payment_id} is not pending",
                        reason=f"current status={current_status}",
                    )
                )

            approving = command.approval_status == ApprovalStatus.ADMIN_APPROVED
            if approving and not budget:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code=error_codes.NO_BUDGET_DEFINED,
                        message=f"No budget defined for project {project_id}",
                    )
                )

            allocated_amount = budget.allocated_amount if budget else None
            amount = posting.amount
            approved_sum = await self.payment_repo.get_approved_sum(project_id)
            if approving and approved_sum + amount > allocated_amount:
                await self.uow.rollback()
                logger.warning(
                    f"Rejected approval of payment {command.payment_id} for project {project_id}: "
                    f"approved={approved_sum}, amount={amount}, allocated={allocated_amount}"
                )
                return Return.err(
                    Error(
                        code=error_codes.BUDGET_EXCEEDED,
                        message="Payment exceeds remaining project budget",
                        reason=(
                            f"allocated={allocated_amount}, approved={approved_sum}, "
                            f"requested={amount}"
                        ),
                    )
                )

            await self.payment_repo.update_status(command.payment_id, command.approval_status)
            await self.uow.commit()

            approved_after = approved_sum + amount if approving else approved_sum
            logger.info(
                f"Payment {command.payment_id} for project {project_id} "
                f"moved to {command.approval_status.value}"
            )
            return Return.ok(
                PaymentPostingResponseDTO(
                    payment_id=posting.id,
                    invoice_id=posting.invoice_id,
                    project_id=posting.project_id,
                    amount=amount,
                    date=posting.date,
                    approval_status=command.approval_status.value,
                    remaining_budget=(
                        allocated_amount - approved_after if allocated_amount is not None else None
                    ),
                )
            )

        except Exception as e:
            await self.uow.rollback()
            if is_concurrency_conflict(e):
                return Return.err(
                    Error(
                        code=error_codes.CONCURRENCY_CONFLICT,
                        message="Status update conflicted with a concurrent transaction, retry",
                        reason=str(e),
                    )
                )
            return Return.err(
                Error(
                    code=error_codes.UPDATE_PAYMENT_STATUS_FAILED,
                    message="Failed to update payment status",
                    reason=str(e),
                )
            )
