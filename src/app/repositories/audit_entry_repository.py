"""Audit Entry Repository Interface

Append-only: there is no update or delete operation.
"""

from abc import ABC, abstractmethod
from typing import List, Tuple
from src.domain.audit_entry import AuditEntry


class AuditEntryRepository(ABC):

    @abstractmethod
    async def create(self, entry: AuditEntry) -> AuditEntry:
        """
        Add an audit entry to the current transaction

        Args:
            entry: AuditEntry to persist

        Returns:
            Flushed AuditEntry with generated ID (durable only after commit)
        """
        pass

    @abstractmethod
    async def list_by_row(
        self, table_name: str, row_id: str, limit: int = 20, offset: int = 0
    ) -> Tuple[List[AuditEntry], int]:
        """
        Retrieve audit entries for one row, newest first

        Returns:
            Tuple of (list of AuditEntry, total count)
        """
        pass
