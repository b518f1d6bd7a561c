"""ReconcileBudgets Use Case

Sweeps every project budget against its approved postings and reports
projects whose approved spend exceeds the allocation.
"""

import logging
import time
from decimal import Decimal
from libs.result import Result, Return, Error
from src.app.repositories.project_budget_repository import ProjectBudgetRepository
from src.app.repositories.payment_posting_repository import PaymentPostingRepository
from src.app.use_cases import error_codes
from src.domain.base import utc_now
from .dtos import BudgetOverrunDTO, BudgetReconciliationResultDTO

logger = logging.getLogger(__name__)


class ReconcileBudgets:
    """
    Use Case: Reconcile project budgets against approved spend

    Business Rules:
    1. Every budget is compared with the sum of its approved postings
    2. approved_total > allocated_amount is reported as an overrun
       (PostPayment prevents this; it can only appear if an allocation
       was lowered after postings were approved)
    3. Approved postings on a project without a budget are reported too
    4. Does NOT modify any data (read-only reconciliation)
    """

    def __init__(
        self,
        budget_repo: ProjectBudgetRepository,
        payment_repo: PaymentPostingRepository,
    ):
        self.budget_repo = budget_repo
        self.payment_repo = payment_repo

    async def execute(self) -> Result[BudgetReconciliationResultDTO]:
        start_time = time.time()
        reconciliation_time = utc_now()

        try:
            logger.info("Starting project budget reconciliation")

            budgets = await self.budget_repo.get_all()
            approved_sums = await self.payment_repo.get_approved_sums()

            overruns: list[BudgetOverrunDTO] = []

            for budget in budgets:
                approved_total = approved_sums.pop(budget.project_id, Decimal("0"))
                if approved_total > budget.allocated_amount:
                    overrun = approved_total - budget.allocated_amount
                    overruns.append(
                        BudgetOverrunDTO(
                            project_id=budget.project_id,
                            allocated_amount=budget.allocated_amount,
                            approved_total=approved_total,
                            overrun=overrun,
                        )
                    )
                    logger.warning(
                        f"Budget overrun for project {budget.project_id}: "
                        f"allocated={budget.allocated_amount}, approved={approved_total}, "
                        f"overrun={overrun}"
                    )

            # Whatever is left has approved spend but no budget at all
            for project_id, approved_total in approved_sums.items():
                overruns.append(
                    BudgetOverrunDTO(
                        project_id=project_id,
                        allocated_amount=None,
                        approved_total=approved_total,
                        overrun=approved_total,
                    )
                )
                logger.warning(
                    f"Approved spend without budget for project {project_id}: "
                    f"approved={approved_total}"
                )

            execution_time_ms = int((time.time() - start_time) * 1000)

            response = BudgetReconciliationResultDTO(
                total_budgets_checked=len(budgets),
                overruns_found=len(overruns),
                overruns=overruns,
                reconciliation_time=reconciliation_time,
                execution_time_ms=execution_time_ms,
            )

            if overruns:
                logger.warning(
                    f"Reconciliation complete. Found {len(overruns)} overruns "
                    f"across {len(budgets)} budgets in {execution_time_ms}ms"
                )
            else:
                logger.info(
                    f"Reconciliation complete. All {len(budgets)} budgets within allocation "
                    f"in {execution_time_ms}ms"
                )

            return Return.ok(response)

        except Exception as e:
            logger.error(f"Budget reconciliation failed: {e}")
            return Return.err(
                Error(
                    code=error_codes.RECONCILIATION_FAILED,
                    message="Failed to reconcile project budgets",
                    reason=str(e),
                )
            )
