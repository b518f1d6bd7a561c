"""List Project Beneficiaries Use Case

Beneficiary links of a project, visible only when the project has at
least one round in the caller's region.
"""

from typing import Optional
from libs.result import Result, Return
from src.app.repositories.distribution_repository import DistributionRepository
from .dtos import ProjectBeneficiaryDTO, ProjectBeneficiariesResponseDTO


class ListProjectBeneficiaries:

    def __init__(self, distribution_repo: DistributionRepository):
        self.distribution_repo = distribution_repo

    async def execute(
        self, project_id: int, caller_region: Optional[str]
    ) -> Result[ProjectBeneficiariesResponseDTO]:
        beneficiaries = await self.distribution_repo.list_project_beneficiaries(
            project_id, caller_region
        )

        return Return.ok(
            ProjectBeneficiariesResponseDTO(
                project_id=project_id,
                beneficiaries=[
                    ProjectBeneficiaryDTO(beneficiary_id=b.id, name=b.name)
                    for b in beneficiaries
                ],
            )
        )
