"""Base classes for domain entities and value objects."""

from typing import Any

from pydantic import BaseModel, ConfigDict


class ValueObject(BaseModel):
    """Base class for value objects (immutable, defined by their values)."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class Entity(BaseModel):
    """
    Base class for entities loaded from the configuration store.

    Entities are read-only snapshots for one evaluation pass; nothing in the
    engine mutates them.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    id: str

    def __eq__(self, other: Any) -> bool:
        """Entities are equal if they have the same ID and type."""
        if not isinstance(other, self.__class__):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on entity ID."""
        return hash((self.__class__.__name__, self.id))
