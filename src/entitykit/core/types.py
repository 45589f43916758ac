"""
Core type definitions and protocols.

This module provides the protocol the entity layer expects from a storage
backend. Entities never persist themselves; they only query storage from
validation hooks, for example to check uniqueness.
"""

from typing import TYPE_CHECKING, Any, Dict, List, Optional, Protocol, Type, runtime_checkable

if TYPE_CHECKING:
    from .models.entity import Entity


@runtime_checkable
class StorageInterface(Protocol):
    """Protocol defining the storage queries available to validation hooks."""

    def find_by(self, entity_kind: Type["Entity"], criteria: Dict[str, Any]) -> List["Entity"]:
        """Get all entities of a kind whose fields equal the given criteria."""
        ...

    def find_one_by(self, entity_kind: Type["Entity"], criteria: Dict[str, Any]) -> Optional["Entity"]:
        """Get the first entity of a kind matching the criteria, if any."""
        ...

    def execute_query(self, query: str, params: Optional[Dict[str, Any]] = None) -> List["Entity"]:
        """Run a backend-specific query and return the entities it selects."""
        ...
