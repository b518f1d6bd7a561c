"""RebuildAggregates Use Case

Runs every aggregate rebuild in sequence. Each rebuild commits on its
own, so one failure does not undo the others; the failure is reported
with the names of the aggregates that kept their previous contents.
"""

import logging
import time
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.aggregate_repository import AggregateRepository
from src.app.use_cases import error_codes
from .dtos import RebuildAggregatesResultDTO
from .rebuild_aggregate import (
    RebuildDailySpend,
    RebuildRoundAttendance,
    RebuildDistributionSummary,
)

logger = logging.getLogger(__name__)


class RebuildAggregates:

    def __init__(self, uow: UnitOfWork, aggregate_repo: AggregateRepository):
        self.steps = [
            RebuildDailySpend(uow, aggregate_repo),
            RebuildRoundAttendance(uow, aggregate_repo),
            RebuildDistributionSummary(uow, aggregate_repo),
        ]

    async def execute(self) -> Result[RebuildAggregatesResultDTO]:
        start_time = time.time()
        rebuilds = []
        failures = []

        for step in self.steps:
            result = await step.execute()
            if result.is_err():
                failures.append(f"{step.name}: {result.error.reason}")
            else:
                rebuilds.append(result.value)

        if failures:
            logger.error(f"Aggregate maintenance finished with {len(failures)} failed rebuilds")
            return Return.err(
                Error(
                    code=error_codes.AGGREGATE_REBUILD_FAILED,
                    message=f"{len(failures)} of {len(self.steps)} aggregate rebuilds failed",
                    reason="; ".join(failures),
                )
            )

        return Return.ok(
            RebuildAggregatesResultDTO(
                rebuilds=rebuilds,
                execution_time_ms=int((time.time() - start_time) * 1000),
            )
        )
