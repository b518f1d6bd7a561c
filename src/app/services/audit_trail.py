"""Audit Trail Service

Mirrors every mutation of a watched entity into the audit log as part of
the caller's unit of work. The entry is only flushed here; it becomes
durable together with the mutation when the caller commits, and disappears
with it on rollback.
"""

import logging
from typing import Any, Dict, Optional
from src.app.repositories.audit_entry_repository import AuditEntryRepository
from src.app.services.actor_resolver import ActorResolver, ActorUnresolved
from src.domain.audit_entry import AuditAction, AuditEntry
from src.domain.base import BaseModel

logger = logging.getLogger(__name__)


def snapshot(entity: BaseModel) -> Dict[str, Any]:
    """JSON-safe copy of an entity's column values"""
    return entity.model_dump(mode="json")


class AuditTrail:

    def __init__(self, audit_repo: AuditEntryRepository, actor_resolver: ActorResolver):
        self.audit_repo = audit_repo
        self.actor_resolver = actor_resolver

    def resolve_actor(self) -> Optional[str]:
        try:
            return self.actor_resolver.resolve()
        except ActorUnresolved as e:
            logger.warning(f"ACTOR_UNRESOLVED: recording audit entry with null actor ({e})")
            return None

    async def record_mutation(
        self,
        entity_name: str,
        entity_id: Any,
        action: AuditAction,
        before: Optional[Dict[str, Any]],
        after: Optional[Dict[str, Any]],
        origin: Optional[str],
        actor: Optional[str] = None,
    ) -> AuditEntry:
        """
        Record one audit entry in the current unit of work

        Args:
            entity_name: Table of the mutated row
            entity_id: Identifier of the mutated row
            action: INSERT, UPDATE or DELETE
            before: Snapshot before the mutation (None for inserts)
            after: Snapshot after the mutation (None for deletes)
            origin: Network origin of the request
            actor: Acting user; resolved from context when not given

        Returns:
            The flushed (uncommitted) AuditEntry
        """
        if actor is None:
            actor = self.resolve_actor()

        entry = AuditEntry(
            user_id=actor,
            action=action,
            table_name=entity_name,
            row_id=str(entity_id),
            old_values=before,
            new_values=after,
            client_origin=origin,
        )
        return await self.audit_repo.create(entry)
