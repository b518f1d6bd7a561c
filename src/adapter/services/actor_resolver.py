"""Request-scoped actor resolution

Resolves the acting user from the identifier the API layer extracted from
the request (ACTOR_HEADER). User identifiers are UUIDs issued by the
external identity provider; anything else is treated as unresolved.
"""

import uuid
from typing import Optional
from src.app.services.actor_resolver import ActorResolver, ActorUnresolved


class RequestActorResolver(ActorResolver):

    def __init__(self, raw_actor: Optional[str]):
        self.raw_actor = raw_actor

    def resolve(self) -> str:
        if not self.raw_actor or not self.raw_actor.strip():
            raise ActorUnresolved("no actor in request context")
        try:
            return str(uuid.UUID(self.raw_actor.strip()))
        except ValueError:
            raise ActorUnresolved(f"actor id is not a UUID: {self.raw_actor!r}")
