"""Get Remaining Budget Use Case

Reports allocation minus approved spend for a project.
"""

from libs.result import Result, Return, Error
from src.app.repositories.project_budget_repository import ProjectBudgetRepository
from src.app.use_cases import error_codes
from .dtos import RemainingBudgetResponseDTO


class GetRemainingBudget:
    """
    Get Remaining Budget Use Case

    Read-only. Allocation and approved spend come from one statement, so
    the answer reflects a single committed snapshot. It is not linearized
    with concurrent postings.
    """

    def __init__(self, budget_repo: ProjectBudgetRepository):
        self.budget_repo = budget_repo

    async def execute(self, project_id: int) -> Result[RemainingBudgetResponseDTO]:
        """
        Execute remaining budget lookup

        Args:
            project_id: Project identifier

        Returns:
            Result[RemainingBudgetResponseDTO]: Success with budget position or error

        Errors:
            NO_BUDGET_DEFINED: Project has no budget
        """
        position = await self.budget_repo.get_spend_position(project_id)

        if position is None:
            return Return.err(
                Error(
                    code=error_codes.NO_BUDGET_DEFINED,
                    message=f"No budget defined for project {project_id}",
                )
            )

        allocated_amount, approved_total = position
        return Return.ok(
            RemainingBudgetResponseDTO(
                project_id=project_id,
                allocated_amount=allocated_amount,
                approved_total=approved_total,
                remaining_budget=allocated_amount - approved_total,
            )
        )
