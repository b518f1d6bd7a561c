"""List Round Attendees Use Case

Attendance rows of one round. A round outside the caller's region is
reported exactly like a missing one, so its existence does not leak.
"""

from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.distribution_repository import DistributionRepository
from src.app.services.region_gate import RegionGate
from src.app.use_cases import error_codes
from .dtos import AttendeeDTO, RoundAttendeesResponseDTO


class ListRoundAttendees:

    def __init__(self, distribution_repo: DistributionRepository, region_gate: RegionGate):
        self.distribution_repo = distribution_repo
        self.region_gate = region_gate

    async def execute(
        self, round_id: int, caller_region: Optional[str]
    ) -> Result[RoundAttendeesResponseDTO]:
        round_ = await self.distribution_repo.get_round(round_id)
        visible = self.region_gate.visible_rounds([round_] if round_ else [], caller_region)

        if not visible:
            return Return.err(
                Error(
                    code=error_codes.ROUND_NOT_FOUND,
                    message=f"Distribution round {round_id} not found",
                )
            )

        records = await self.distribution_repo.list_attendance(round_id, caller_region)

        return Return.ok(
            RoundAttendeesResponseDTO(
                round_id=round_id,
                attendees=[
                    AttendeeDTO(
                        attendance_id=record.id,
                        beneficiary_id=record.beneficiary_id,
                        status=record.status.value,
                    )
                    for record in records
                ],
            )
        )
