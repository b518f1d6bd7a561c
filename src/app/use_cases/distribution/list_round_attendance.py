"""List Round Attendance Use Case

Attendance aggregate rows for rounds in the caller's region, as of the
last rebuild.
"""

from typing import Optional
from libs.result import Result, Return
from src.app.repositories.aggregate_repository import AggregateRepository
from src.domain.aggregates import AggregateName
from .dtos import RoundAttendanceDTO, RoundAttendanceResponseDTO


class ListRoundAttendance:

    def __init__(self, aggregate_repo: AggregateRepository):
        self.aggregate_repo = aggregate_repo

    async def execute(
        self, caller_region: Optional[str], project_id: Optional[int] = None
    ) -> Result[RoundAttendanceResponseDTO]:
        rows = await self.aggregate_repo.list_round_attendance(caller_region, project_id=project_id)
        refresh = await self.aggregate_repo.get_refresh(AggregateName.ROUND_ATTENDANCE)

        return Return.ok(
            RoundAttendanceResponseDTO(
                rounds=[
                    RoundAttendanceDTO(
                        round_id=row.round_id,
                        project_id=row.project_id,
                        actual_present=row.actual_present,
                    )
                    for row in rows
                ],
                as_of=refresh.refreshed_at if refresh else None,
            )
        )
