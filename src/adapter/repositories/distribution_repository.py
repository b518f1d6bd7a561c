"""SQLAlchemy implementation of DistributionRepository

Round-derived reads with the region gate applied as a SQL predicate, so
rows reached through a round outside the caller's region are never loaded.
"""

from typing import List, Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.distribution_repository import DistributionRepository
from src.app.services.region_gate import RegionGate
from src.domain.beneficiary import Beneficiary, ProjectBeneficiaryLink
from src.domain.distribution_round import DistributionRound, AttendanceRecord


class SqlAlchemyDistributionRepository(DistributionRepository):

    def __init__(self, session: AsyncSession, region_gate: Optional[RegionGate] = None):
        self.session = session
        self.region_gate = region_gate or RegionGate()

    async def list_rounds(
        self, caller_region: Optional[str], project_id: Optional[int] = None
    ) -> List[DistributionRound]:
        stmt = select(DistributionRound).where(
            self.region_gate.round_predicate(DistributionRound.location, caller_region)
        )
        if project_id is not None:
            stmt = stmt.where(DistributionRound.project_id == project_id)
        stmt = stmt.order_by(DistributionRound.date, DistributionRound.id)

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_round(self, round_id: int) -> Optional[DistributionRound]:
        stmt = select(DistributionRound).where(DistributionRound.id == round_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_attendance(
        self, round_id: int, caller_region: Optional[str]
    ) -> List[AttendanceRecord]:
        stmt = (
            select(AttendanceRecord)
            .join(DistributionRound, AttendanceRecord.round_id == DistributionRound.id)
            .where(
                AttendanceRecord.round_id == round_id,
                self.region_gate.round_predicate(DistributionRound.location, caller_region),
            )
            .order_by(AttendanceRecord.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_project_beneficiaries(
        self, project_id: int, caller_region: Optional[str]
    ) -> List[Beneficiary]:
        has_visible_round = (
            select(DistributionRound.id)
            .where(
                DistributionRound.project_id == project_id,
                self.region_gate.round_predicate(DistributionRound.location, caller_region),
            )
            .exists()
        )
        stmt = (
            select(Beneficiary)
            .join(ProjectBeneficiaryLink, ProjectBeneficiaryLink.beneficiary_id == Beneficiary.id)
            .where(ProjectBeneficiaryLink.project_id == project_id, has_visible_round)
            .distinct()
            .order_by(Beneficiary.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
