"""Budget Reconciliation Background Worker

Periodically checks every project budget against its approved postings.
Can be run as a standalone script or integrated with a scheduler.
"""

import asyncio
import logging
from typing import Optional
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.repositories import (
    SqlAlchemyProjectBudgetRepository,
    SqlAlchemyPaymentPostingRepository,
)
from src.app.use_cases.ledger import ReconcileBudgets, BudgetReconciliationResultDTO
from src.domain.base import utc_now

logger = logging.getLogger(__name__)


class BudgetReconcilerWorker:
    """
    Background worker for budget reconciliation

    Usage:
        worker = BudgetReconcilerWorker()
        result = await worker.run_once()

        await worker.run_forever(interval_seconds=86400)
    """

    def __init__(
        self,
        db_uri: Optional[str] = None,
    ):
        self.db_uri = db_uri or ApplicationConfig.DB_URI

        self.engine = create_async_engine(self.db_uri, echo=False, future=True)
        self.async_session_factory = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )

        logger.info("BudgetReconcilerWorker initialized")

    async def run_once(self) -> BudgetReconciliationResultDTO:
        if not ApplicationConfig.BUDGET_RECONCILIATION_ENABLED:
            logger.info("Budget reconciliation is disabled, skipping")
            return BudgetReconciliationResultDTO(
                total_budgets_checked=0,
                overruns_found=0,
                overruns=[],
                reconciliation_time=utc_now(),
                execution_time_ms=0,
            )

        async with self.async_session_factory() as session:
            use_case = ReconcileBudgets(
                budget_repo=SqlAlchemyProjectBudgetRepository(session),
                payment_repo=SqlAlchemyPaymentPostingRepository(session),
            )

            result = await use_case.execute()

            if result.is_err():
                logger.error(f"Budget reconciliation failed: {result.error.message}")
                raise RuntimeError(f"Budget reconciliation failed: {result.error.message}")

            response = result.value

            if response.overruns_found > 0:
                logger.error(f"ALERT: {response.overruns_found} projects over budget!")
                for o in response.overruns:
                    logger.error(
                        f"  - Project {o.project_id}: allocated={o.allocated_amount}, "
                        f"approved={o.approved_total}, overrun={o.overrun}"
                    )

            return response

    async def run_forever(self, interval_seconds: int = 86400):
        logger.info(
            f"Starting continuous budget reconciliation with {interval_seconds}s interval"
        )

        while True:
            try:
                result = await self.run_once()
                logger.info(
                    f"Reconciliation cycle complete. "
                    f"Checked {result.total_budgets_checked} budgets, "
                    f"found {result.overruns_found} overruns "
                    f"in {result.execution_time_ms}ms"
                )
            except Exception as e:
                logger.error(f"Reconciliation cycle failed: {e}")

            await asyncio.sleep(interval_seconds)

    async def shutdown(self):
        await self.engine.dispose()
        logger.info("BudgetReconcilerWorker shutdown complete")


async def main():
    """
    Usage:
        python -m src.worker.budget_reconciler --once
        python -m src.worker.budget_reconciler --interval 3600
    """
    import argparse

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Budget Reconciliation Worker")
    parser.add_argument(
        "--once", action="store_true", help="Run once and exit"
    )
    parser.add_argument(
        "--interval", type=int,
        default=ApplicationConfig.BUDGET_RECONCILIATION_INTERVAL_SECONDS,
        help="Interval between runs in seconds"
    )
    args = parser.parse_args()

    worker = BudgetReconcilerWorker()

    try:
        if args.once:
            result = await worker.run_once()
            print("Budget reconciliation complete:")
            print(f"  Budgets checked: {result.total_budgets_checked}")
            print(f"  Overruns found: {result.overruns_found}")
            print(f"  Execution time: {result.execution_time_ms}ms")
        else:
            await worker.run_forever(interval_seconds=args.interval)
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")
    finally:
        await worker.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
