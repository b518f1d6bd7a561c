"""Distribution Repository Interface

Read access to rounds and round-derived records. Every method that can
surface round data takes the caller's region and applies the region gate;
there is no unfiltered read path.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from src.domain.beneficiary import Beneficiary
from src.domain.distribution_round import DistributionRound, AttendanceRecord


class DistributionRepository(ABC):

    @abstractmethod
    async def list_rounds(
        self, caller_region: Optional[str], project_id: Optional[int] = None
    ) -> List[DistributionRound]:
        """
        Retrieve rounds visible in the caller's region

        Args:
            caller_region: Region from the request context (None => nothing visible)
            project_id: Optional project filter

        Returns:
            Rounds ordered by date, then id
        """
        pass

    @abstractmethod
    async def get_round(self, round_id: int) -> Optional[DistributionRound]:
        """
        Retrieve a round by ID without region filtering

        Callers must pass the result through RegionGate before exposing it.
        """
        pass

    @abstractmethod
    async def list_attendance(
        self, round_id: int, caller_region: Optional[str]
    ) -> List[AttendanceRecord]:
        """Attendance records of a round, empty when the round is not visible"""
        pass

    @abstractmethod
    async def list_project_beneficiaries(
        self, project_id: int, caller_region: Optional[str]
    ) -> List[Beneficiary]:
        """
        Beneficiaries linked to a project

        A link is visible only when the project has at least one round in
        the caller's region.
        """
        pass
