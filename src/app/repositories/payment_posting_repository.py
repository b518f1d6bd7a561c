"""Payment Posting Repository Interface

Defines the contract for payment posting persistence operations.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Dict, Optional
from src.domain.payment_posting import PaymentPosting, ApprovalStatus


class PaymentPostingRepository(ABC):
    """
    Repository interface for PaymentPosting persistence

    Postings are never deleted and their amount/project never change;
    only approval_status is updated.
    """

    @abstractmethod
    async def create(self, posting: PaymentPosting) -> PaymentPosting:
        """
        Create a new payment posting

        Args:
            posting: PaymentPosting entity to persist

        Returns:
            Created PaymentPosting with generated ID
        """
        pass

    @abstractmethod
    async def get_by_id(self, payment_id: int, for_update: bool = False) -> Optional[PaymentPosting]:
        """
        Retrieve posting by ID

        Args:
            payment_id: Payment ID
            for_update: If True, lock the row with SELECT FOR UPDATE

        Returns:
            PaymentPosting if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_approved_sum(self, project_id: int) -> Decimal:
        """
        Sum of admin_approved posting amounts for a project

        Returns:
            Decimal sum (0 when the project has no approved postings)
        """
        pass

    @abstractmethod
    async def get_approved_sums(self) -> Dict[int, Decimal]:
        """Approved sum per project for every project with approved postings"""
        pass

    @abstractmethod
    async def update_status(self, payment_id: int, status: ApprovalStatus) -> None:
        """Set approval_status of a posting (caller holds the project lock)"""
        pass
