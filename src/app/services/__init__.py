from .unit_of_work import UnitOfWork
from .actor_resolver import ActorResolver, ActorUnresolved
from .audit_trail import AuditTrail, snapshot
from .posting_locks import PostingLockRegistry
from .region_gate import RegionGate

__all__ = [
    "UnitOfWork",
    "ActorResolver",
    "ActorUnresolved",
    "AuditTrail",
    "snapshot",
    "PostingLockRegistry",
    "RegionGate",
]
