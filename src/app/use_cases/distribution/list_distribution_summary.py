"""List Distribution Summary Use Case

Daily distribution summary rows for the caller's region. The summary is
refreshed with the other aggregates and may be stale between rebuilds;
as_of tells the caller how stale.
"""

from datetime import date
from typing import Optional
from libs.result import Result, Return
from src.app.repositories.aggregate_repository import AggregateRepository
from src.domain.aggregates import AggregateName
from .dtos import DistributionSummaryDTO, DistributionSummaryResponseDTO


class ListDistributionSummary:

    def __init__(self, aggregate_repo: AggregateRepository):
        self.aggregate_repo = aggregate_repo

    async def execute(
        self,
        caller_region: Optional[str],
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Result[DistributionSummaryResponseDTO]:
        rows = await self.aggregate_repo.list_distribution_summary(
            caller_region, start_date=start_date, end_date=end_date
        )
        refresh = await self.aggregate_repo.get_refresh(AggregateName.DISTRIBUTION_SUMMARY)

        return Return.ok(
            DistributionSummaryResponseDTO(
                rows=[
                    DistributionSummaryDTO(
                        dist_date=row.dist_date,
                        project_id=row.project_id,
                        location=row.location,
                        beneficiaries_served=row.beneficiaries_served,
                        rounds_count=row.rounds_count,
                    )
                    for row in rows
                ],
                as_of=refresh.refreshed_at if refresh else None,
            )
        )
