from .unit_of_work import SqlAlchemyUnitOfWork
from .actor_resolver import RequestActorResolver

__all__ = [
    "SqlAlchemyUnitOfWork",
    "RequestActorResolver",
]
