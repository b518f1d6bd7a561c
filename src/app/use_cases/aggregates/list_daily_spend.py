"""List Daily Spend Use Case

Reads the daily spend aggregate for a project as of its last rebuild.
"""

from datetime import date
from typing import Optional
from libs.result import Result, Return
from src.app.repositories.aggregate_repository import AggregateRepository
from src.domain.aggregates import AggregateName
from .dtos import DailySpendDTO, DailySpendResponseDTO


class ListDailySpend:

    def __init__(self, aggregate_repo: AggregateRepository):
        self.aggregate_repo = aggregate_repo

    async def execute(
        self,
        project_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Result[DailySpendResponseDTO]:
        rows = await self.aggregate_repo.list_daily_spend(project_id, start_date, end_date)
        refresh = await self.aggregate_repo.get_refresh(AggregateName.DAILY_SPEND)

        return Return.ok(
            DailySpendResponseDTO(
                project_id=project_id,
                days=[
                    DailySpendDTO(
                        pay_date=row.pay_date,
                        total_spent=row.total_spent,
                        payments_count=row.payments_count,
                    )
                    for row in rows
                ],
                as_of=refresh.refreshed_at if refresh else None,
            )
        )
