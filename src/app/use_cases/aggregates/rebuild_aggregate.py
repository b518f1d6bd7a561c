"""Aggregate Rebuild Use Cases

Each rebuild replaces one derived table wholesale (DELETE + INSERT ...
SELECT) and records its refresh marker in the same transaction, then
commits once. Concurrent rebuilds of the same aggregate queue on a
rebuild lock held until that commit. Readers see either the old or the
new contents, never an empty or half-built table. On failure the
transaction is rolled back and the previous contents stay visible.
"""

import logging
import time
from abc import ABC, abstractmethod
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.aggregate_repository import AggregateRepository
from src.app.use_cases import error_codes
from src.domain.aggregates import AggregateName
from .dtos import AggregateRebuildDTO

logger = logging.getLogger(__name__)


class RebuildAggregate(ABC):
    """
    Base use case: atomic full replace of one aggregate

    Idempotent: running it twice with no source changes in between yields
    identical contents.
    """

    name: str = ""

    def __init__(self, uow: UnitOfWork, aggregate_repo: AggregateRepository):
        self.uow = uow
        self.aggregate_repo = aggregate_repo

    @abstractmethod
    async def _replace(self) -> int:
        """Rewrite the aggregate table, returning its new row count"""
        pass

    async def execute(self) -> Result[AggregateRebuildDTO]:
        start_time = time.time()

        try:
            await self.aggregate_repo.lock_for_rebuild(self.name)
            row_count = await self._replace()
            execution_time_ms = int((time.time() - start_time) * 1000)
            refresh = await self.aggregate_repo.record_refresh(
                self.name, row_count, execution_time_ms
            )
            refreshed_at = refresh.refreshed_at

            await self.uow.commit()

            logger.info(f"Rebuilt {self.name}: {row_count} rows in {execution_time_ms}ms")
            return Return.ok(
                AggregateRebuildDTO(
                    name=self.name,
                    row_count=row_count,
                    refreshed_at=refreshed_at,
                    execution_time_ms=execution_time_ms,
                )
            )

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Rebuild of {self.name} failed, previous contents kept: {e}")
            return Return.err(
                Error(
                    code=error_codes.AGGREGATE_REBUILD_FAILED,
                    message=f"Failed to rebuild {self.name}",
                    reason=str(e),
                )
            )


class RebuildDailySpend(RebuildAggregate):
    """Approved spend per (project, date): sum of amounts and posting count"""

    name = AggregateName.DAILY_SPEND

    async def _replace(self) -> int:
        return await self.aggregate_repo.replace_daily_spend()


class RebuildRoundAttendance(RebuildAggregate):
    """Present count per round, outer join so unattended rounds report 0"""

    name = AggregateName.ROUND_ATTENDANCE

    async def _replace(self) -> int:
        return await self.aggregate_repo.replace_round_attendance()


class RebuildDistributionSummary(RebuildAggregate):
    """Distinct beneficiaries served and rounds held per (date, project, location)"""

    name = AggregateName.DISTRIBUTION_SUMMARY

    async def _replace(self) -> int:
        return await self.aggregate_repo.replace_distribution_summary()
