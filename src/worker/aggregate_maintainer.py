"""Aggregate Maintenance Background Worker

Rebuilds the reporting aggregates from committed source rows on a fixed
interval. Aggregate reads are only as fresh as the last successful run.
"""

import asyncio
import logging
from typing import Optional
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.repositories import SqlAlchemyAggregateRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.aggregates import RebuildAggregates, RebuildAggregatesResultDTO
from src.depends import enable_sqlite_foreign_keys

logger = logging.getLogger(__name__)


class AggregateMaintainerWorker:
    """
    Background worker for aggregate rebuilds

    Features:
    - Replaces each aggregate atomically (readers never see a partial table)
    - A failed rebuild keeps the previous contents and is logged
    - Can run once or continuously

    Usage:
        worker = AggregateMaintainerWorker()
        result = await worker.run_once()

        await worker.run_forever(interval_seconds=900)
    """

    def __init__(
        self,
        db_uri: Optional[str] = None,
    ):
        self.db_uri = db_uri or ApplicationConfig.DB_URI

        self.engine = create_async_engine(self.db_uri, echo=False, future=True)
        enable_sqlite_foreign_keys(self.engine)
        self.async_session_factory = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )

        logger.info("AggregateMaintainerWorker initialized")

    async def run_once(self) -> Optional[RebuildAggregatesResultDTO]:
        """
        Rebuild every aggregate once

        Returns:
            RebuildAggregatesResultDTO, or None when maintenance is disabled

        Raises:
            RuntimeError: if any rebuild failed
        """
        if not ApplicationConfig.AGGREGATE_REFRESH_ENABLED:
            logger.info("Aggregate maintenance is disabled, skipping")
            return None

        async with self.async_session_factory() as session:
            use_case = RebuildAggregates(
                uow=SqlAlchemyUnitOfWork(session),
                aggregate_repo=SqlAlchemyAggregateRepository(session),
            )

            result = await use_case.execute()

            if result.is_err():
                logger.error(f"{result.error.message}: {result.error.reason}")
                raise RuntimeError(result.error.message)

            for rebuild in result.value.rebuilds:
                logger.info(
                    f"  - {rebuild.name}: {rebuild.row_count} rows in {rebuild.execution_time_ms}ms"
                )

            return result.value

    async def run_forever(self, interval_seconds: int = 900):
        logger.info(
            f"Starting continuous aggregate maintenance with {interval_seconds}s interval"
        )

        while True:
            try:
                result = await self.run_once()
                if result:
                    logger.info(
                        f"Aggregate cycle complete. Rebuilt {len(result.rebuilds)} aggregates "
                        f"in {result.execution_time_ms}ms"
                    )
            except Exception as e:
                logger.error(f"Aggregate cycle failed: {e}")

            await asyncio.sleep(interval_seconds)

    async def shutdown(self):
        await self.engine.dispose()
        logger.info("AggregateMaintainerWorker shutdown complete")


async def main():
    """
    Usage:
        python -m src.worker.aggregate_maintainer --once
        python -m src.worker.aggregate_maintainer --interval 300
    """
    import argparse

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Aggregate Maintenance Worker")
    parser.add_argument(
        "--once", action="store_true", help="Run once and exit"
    )
    parser.add_argument(
        "--interval", type=int,
        default=ApplicationConfig.AGGREGATE_REFRESH_INTERVAL_SECONDS,
        help="Interval between runs in seconds"
    )
    args = parser.parse_args()

    worker = AggregateMaintainerWorker()

    try:
        if args.once:
            result = await worker.run_once()
            if result:
                print("Aggregate maintenance complete:")
                for rebuild in result.rebuilds:
                    print(f"  {rebuild.name}: {rebuild.row_count} rows")
                print(f"  Execution time: {result.execution_time_ms}ms")
        else:
            await worker.run_forever(interval_seconds=args.interval)
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")
    finally:
        await worker.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
