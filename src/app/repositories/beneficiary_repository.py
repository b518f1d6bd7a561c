"""Beneficiary Repository Interface"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.beneficiary import Beneficiary


class BeneficiaryRepository(ABC):

    @abstractmethod
    async def get_by_id(self, beneficiary_id: int) -> Optional[Beneficiary]:
        pass

    @abstractmethod
    async def update(self, beneficiary: Beneficiary) -> Beneficiary:
        """
        Flush changes to a beneficiary without committing

        Audited callers must record the mutation in the same unit of work
        before committing.
        """
        pass
