"""Actor Resolver Interface

Resolves the identity of the user performing a mutation. Resolution may
fail (unauthenticated context); callers record a null actor instead of
rejecting the mutation.
"""

from abc import ABC, abstractmethod


class ActorUnresolved(Exception):
    """The acting user could not be determined (non-fatal)"""
    pass


class ActorResolver(ABC):

    @abstractmethod
    def resolve(self) -> str:
        """
        Return the acting user identifier

        Raises:
            ActorUnresolved: If no valid actor is available in the context
        """
        pass
