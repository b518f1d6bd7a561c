"""SQLAlchemy implementation of BeneficiaryRepository"""

from typing import Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.beneficiary_repository import BeneficiaryRepository
from src.domain.beneficiary import Beneficiary


class SqlAlchemyBeneficiaryRepository(BeneficiaryRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, beneficiary_id: int) -> Optional[Beneficiary]:
        stmt = select(Beneficiary).where(Beneficiary.id == beneficiary_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def update(self, beneficiary: Beneficiary) -> Beneficiary:
        self.session.add(beneficiary)
        await self.session.flush()
        await self.session.refresh(beneficiary)
        return beneficiary
