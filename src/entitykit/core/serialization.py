"""
Plain-object serialization of entity graphs.

PlainObjectSerializer turns an entity into a JSON-compatible dictionary,
optionally expanding referenced entities and entity collections. Entity graphs
may be cyclic: each call keeps a recursion guard holding the identities of the
entities on the current expansion path, and omits any reference back to one of
them. The guard is created per call, so separate calls never share state.

Expansion is iterative. Each entity being expanded is a generator on an
explicit work stack, so graph depth is not limited by the interpreter's
recursion limit.
"""

import logging
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Iterator, List, Set, Tuple

from .dates import date_to_string
from .enums import FieldKind
from .models.entity import Entity

logger = logging.getLogger(__name__)

_SCALAR_TYPES = (bool, int, float, str)

# A nested entity paired with the dictionary its fields are written into
Expansion = Tuple[Entity, Dict[str, Any]]


class PlainObjectSerializer:
    """
    Cycle-safe converter from entities to plain dictionaries.

    Attributes:
        include_entities (bool): Expand fields referencing other entities
        include_collections (bool): Expand fields holding entity collections
        by_alias (bool): Emit camelCase keys
    """

    def __init__(
        self,
        include_entities: bool = False,
        include_collections: bool = False,
        by_alias: bool = False,
    ):
        self.include_entities = include_entities
        self.include_collections = include_collections
        self.by_alias = by_alias

    def serialize(self, entity: Entity) -> Dict[str, Any]:
        """
        Convert an entity and, depending on the flags, the entities it references.

        Args:
            entity: Entity to convert

        Returns:
            Dict[str, Any]: Field values keyed by field name, in declaration order
        """
        result: Dict[str, Any] = {}
        path: Set[int] = {id(entity)}
        stack: List[Tuple[Entity, Iterator[Expansion]]] = [
            (entity, self._fill(entity, result, path))
        ]

        while stack:
            current, pending = stack[-1]
            expansion = next(pending, None)
            if expansion is None:
                stack.pop()
                path.discard(id(current))
                continue
            nested, target = expansion
            path.add(id(nested))
            stack.append((nested, self._fill(nested, target, path)))

        return result

    def _fill(self, entity: Entity, result: Dict[str, Any], path: Set[int]) -> Iterator[Expansion]:
        """
        Write the fields of one entity into result.

        Nested entities are not expanded here: an empty dictionary is placed in
        the output and yielded together with the entity, and the caller fills it
        before resuming this generator. The path therefore always holds exactly
        the entities between the root and the one being filled.
        """
        for spec in entity.field_registry().stored_fields():
            value = getattr(entity, spec.name)
            key = spec.alias if self.by_alias else spec.name

            if spec.kind is FieldKind.REFERENCE or isinstance(value, Entity):
                if not self.include_entities:
                    continue
                if not isinstance(value, Entity):
                    result[key] = self._plain_value(value)
                elif id(value) in path:
                    logger.debug("Omitting back-reference %r of %s", key, type(entity).__name__)
                else:
                    result[key] = child = {}
                    yield value, child
            elif spec.kind is FieldKind.COLLECTION or _holds_entities(value):
                if not self.include_collections:
                    continue
                if value is None:
                    result[key] = None
                    continue
                result[key] = members = []
                for member in value:
                    if not isinstance(member, Entity):
                        members.append(self._plain_value(member))
                    elif id(member) in path:
                        logger.debug("Omitting back-reference in %r of %s", key, type(entity).__name__)
                    else:
                        child = {}
                        members.append(child)
                        yield member, child
            else:
                result[key] = self._plain_value(value)

    def _plain_value(self, value: Any) -> Any:
        """Convert a non-entity value, descending into lists, tuples and dicts."""
        if value is None or isinstance(value, _SCALAR_TYPES):
            return value
        if isinstance(value, (list, tuple)):
            return [self._plain_value(item) for item in value if not isinstance(item, Entity)]
        if isinstance(value, dict):
            return {
                _plain_key(k): self._plain_value(v)
                for k, v in value.items()
                if not isinstance(v, Entity)
            }
        if isinstance(value, datetime):
            return date_to_string(value)
        if isinstance(value, date):
            return value.isoformat()
        if isinstance(value, Enum):
            return value.value
        return str(value)


def _holds_entities(value: Any) -> bool:
    return isinstance(value, (list, tuple)) and any(isinstance(item, Entity) for item in value)


def _plain_key(key: Any) -> Any:
    if key is None or isinstance(key, _SCALAR_TYPES):
        return key
    if isinstance(key, Enum):
        return key.value
    return str(key)
