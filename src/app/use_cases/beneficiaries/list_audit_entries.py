"""
List Audit Entries Use Case

Retrieves the audit history of one row, newest first, with pagination.
"""
from libs.result import Result, Return
from src.app.repositories.audit_entry_repository import AuditEntryRepository
from .dtos import AuditEntryDTO, ListAuditEntriesResponseDTO


class ListAuditEntries:

    def __init__(self, audit_repo: AuditEntryRepository):
        self.audit_repo = audit_repo

    async def execute(
        self, table_name: str, row_id: str, limit: int = 20, offset: int = 0
    ) -> Result[ListAuditEntriesResponseDTO]:
        entries, total = await self.audit_repo.list_by_row(
            table_name=table_name,
            row_id=str(row_id),
            limit=limit,
            offset=offset,
        )

        entry_dtos = [
            AuditEntryDTO(
                audit_id=entry.id,
                user_id=entry.user_id,
                action=entry.action.value if hasattr(entry.action, "value") else entry.action,
                table_name=entry.table_name,
                row_id=entry.row_id,
                old_values=entry.old_values,
                new_values=entry.new_values,
                timestamp=entry.timestamp,
                client_origin=entry.client_origin,
            )
            for entry in entries
        ]

        return Return.ok(
            ListAuditEntriesResponseDTO(
                entries=entry_dtos,
                total=total,
                limit=limit,
                offset=offset,
            )
        )
