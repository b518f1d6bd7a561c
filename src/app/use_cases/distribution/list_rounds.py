"""List Rounds Use Case

Returns the distribution rounds visible in the caller's region.
"""

from typing import Optional
from libs.result import Result, Return
from src.app.repositories.distribution_repository import DistributionRepository
from src.app.services.region_gate import RegionGate
from .dtos import RoundDTO, RoundListResponseDTO


class ListRounds:
    """
    Use case: Rounds(region_context)

    Filtering happens in the query; with no region set the list is empty.
    """

    def __init__(self, distribution_repo: DistributionRepository):
        self.distribution_repo = distribution_repo

    async def execute(
        self, caller_region: Optional[str], project_id: Optional[int] = None
    ) -> Result[RoundListResponseDTO]:
        rounds = await self.distribution_repo.list_rounds(caller_region, project_id=project_id)

        return Return.ok(
            RoundListResponseDTO(
                region=RegionGate.normalize(caller_region),
                rounds=[
                    RoundDTO(
                        round_id=r.id,
                        project_id=r.project_id,
                        date=r.date,
                        location=r.location,
                    )
                    for r in rounds
                ],
            )
        )
