"""Ledger API Routes

FastAPI routes for budget-constrained payment postings.
"""

from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.schemas.ledger_request import (
    PostPaymentRequestSchema,
    UpdatePaymentStatusRequestSchema,
)
from src.app.use_cases.ledger import (
    PostPayment,
    UpdatePaymentStatus,
    GetRemainingBudget,
    ReconcileBudgets,
    PostPaymentCommandDTO,
    UpdatePaymentStatusCommandDTO,
    PaymentPostingResponseDTO,
    RemainingBudgetResponseDTO,
    BudgetReconciliationResultDTO,
)
from src.app.services.posting_locks import PostingLockRegistry
from src.adapter.repositories import (
    SqlAlchemyProjectBudgetRepository,
    SqlAlchemyPaymentPostingRepository,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session, get_posting_locks
from src.api.error import ClientError

router = APIRouter(prefix="/ledger", tags=["Ledger"])


@router.post(
    "/payments",
    response_model=PaymentPostingResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        404: {
            "description": "No budget defined for project",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "NO_BUDGET_DEFINED",
                            "message": "No budget defined for project 7"
                        }
                    }
                }
            }
        },
        409: {
            "description": "Budget exceeded or concurrent conflict",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "BUDGET_EXCEEDED",
                            "message": "Payment exceeds remaining project budget"
                        }
                    }
                }
            }
        }
    }
)
async def post_payment(
    request: PostPaymentRequestSchema,
    session: AsyncSession = Depends(get_session),
    posting_locks: PostingLockRegistry = Depends(get_posting_locks),
):
    """
    Post a payment against a project budget.

    Approved postings are checked against the project's allocation; the
    posting is rejected if approved spend would exceed it. Pending and
    rejected postings are recorded without counting toward spend.

    **Returns:**
    - 201: Posting recorded
    - 404: Project has no budget
    - 409: Budget exceeded, or a concurrent transaction conflicted (retry)
    """
    uow = SqlAlchemyUnitOfWork(session)
    budget_repo = SqlAlchemyProjectBudgetRepository(session)
    payment_repo = SqlAlchemyPaymentPostingRepository(session)

    command = PostPaymentCommandDTO(
        project_id=request.project_id,
        invoice_id=request.invoice_id,
        amount=request.amount,
        approval_status=request.approval_status,
        date=request.date,
    )

    use_case = PostPayment(uow, budget_repo, payment_repo, posting_locks)
    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.patch(
    "/payments/{payment_id}/status",
    response_model=PaymentPostingResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def update_payment_status(
    payment_id: int,
    request: UpdatePaymentStatusRequestSchema,
    session: AsyncSession = Depends(get_session),
    posting_locks: PostingLockRegistry = Depends(get_posting_locks),
):
    """
    Approve or reject a pending posting.

    Approval re-runs the budget check under the project's posting lock.

    **Returns:**
    - 200: Status changed
    - 404: Posting or budget not found
    - 409: Posting not pending, or approval would exceed the budget
    """
    uow = SqlAlchemyUnitOfWork(session)
    budget_repo = SqlAlchemyProjectBudgetRepository(session)
    payment_repo = SqlAlchemyPaymentPostingRepository(session)

    command = UpdatePaymentStatusCommandDTO(
        payment_id=payment_id,
        approval_status=request.approval_status,
    )

    use_case = UpdatePaymentStatus(uow, budget_repo, payment_repo, posting_locks)
    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "/projects/{project_id}/remaining-budget",
    response_model=RemainingBudgetResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def get_remaining_budget(
    project_id: int,
    session: AsyncSession = Depends(get_session),
):
    """
    Allocated amount minus the sum of approved postings.

    **Returns:**
    - 200: Remaining budget
    - 404: Project has no budget
    """
    budget_repo = SqlAlchemyProjectBudgetRepository(session)

    use_case = GetRemainingBudget(budget_repo)
    result = await use_case.execute(project_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "/reconciliation",
    response_model=BudgetReconciliationResultDTO,
    status_code=status.HTTP_200_OK,
)
async def reconcile_budgets(
    session: AsyncSession = Depends(get_session),
):
    """
    Read-only sweep listing projects whose approved spend exceeds their
    allocation. An empty list means the ledger invariant holds.
    """
    budget_repo = SqlAlchemyProjectBudgetRepository(session)
    payment_repo = SqlAlchemyPaymentPostingRepository(session)

    use_case = ReconcileBudgets(budget_repo, payment_repo)
    result = await use_case.execute()

    if result.is_err():
        raise ClientError(result.error)

    return result.value
