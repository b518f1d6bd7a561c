"""Project Budget Repository Interface

Defines the contract for project budget persistence operations.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List, Optional, Tuple
from src.domain.project_budget import ProjectBudget


class ProjectBudgetRepository(ABC):
    """
    Repository interface for ProjectBudget persistence

    get_by_project_id(for_update=True) takes a row lock on the budget so
    concurrent approved postings on the same project queue behind it.
    """

    @abstractmethod
    async def get_by_project_id(self, project_id: int, for_update: bool = False) -> Optional[ProjectBudget]:
        """
        Retrieve budget by project ID

        Args:
            project_id: Project identifier
            for_update: If True, lock the row with SELECT FOR UPDATE (pessimistic lock)

        Returns:
            ProjectBudget if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_all(self) -> List[ProjectBudget]:
        """Retrieve every project budget (used by reconciliation)"""
        pass

    @abstractmethod
    async def get_spend_position(self, project_id: int) -> Optional[Tuple[Decimal, Decimal]]:
        """
        Read allocation and approved spend for a project in one statement

        Args:
            project_id: Project identifier

        Returns:
            (allocated_amount, approved_total) from a single snapshot,
            None when the project has no budget
        """
        pass
