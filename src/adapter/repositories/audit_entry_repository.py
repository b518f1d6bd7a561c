"""SQLAlchemy implementation of AuditEntryRepository

Append-only persistence for audit entries. Entries are flushed into the
caller's transaction and never committed here.
"""

from typing import List, Tuple
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.audit_entry_repository import AuditEntryRepository
from src.domain.audit_entry import AuditEntry


class SqlAlchemyAuditEntryRepository(AuditEntryRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, entry: AuditEntry) -> AuditEntry:
        self.session.add(entry)
        await self.session.flush()
        await self.session.refresh(entry)
        return entry

    async def list_by_row(
        self, table_name: str, row_id: str, limit: int = 20, offset: int = 0
    ) -> Tuple[List[AuditEntry], int]:
        """
        Retrieve audit entries for one row with pagination

        Args:
            table_name: Audited table
            row_id: Row identifier
            limit: Maximum number of entries to return
            offset: Number of entries to skip

        Returns:
            Tuple of (list of AuditEntry, total count)
        """
        # Get total count
        count_stmt = select(func.count()).select_from(AuditEntry).where(
            AuditEntry.table_name == table_name,
            AuditEntry.row_id == row_id,
        )
        count_result = await self.session.execute(count_stmt)
        total = count_result.scalar()

        # Newest first; id breaks ties within the same timestamp
        stmt = (
            select(AuditEntry)
            .where(AuditEntry.table_name == table_name, AuditEntry.row_id == row_id)
            .order_by(AuditEntry.timestamp.desc(), AuditEntry.id.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        entries = list(result.scalars().all())

        return entries, total
