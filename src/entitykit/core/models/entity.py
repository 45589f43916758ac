"""
Base class for entity models.

This module provides the Entity dataclass every persisted domain object derives
from. It supplies:
- Generic get/set/has accessors resolved through a per-class field registry
- Conversion to a plain, JSON-compatible dictionary with cycle protection
- Bulk population from untyped input
- Insert/update validation hooks with optional access to storage
- A structural schema derived from the field annotations
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Union, get_origin

from ...exceptions import UndefinedMemberError
from ..dates import now, string_to_date
from ..enums import FieldKind
from .fields import FieldRegistry, FieldSpec, timestamp_field, unwrap_optional
from .validation_error import ValidationError

if TYPE_CHECKING:
    from ..types import StorageInterface

logger = logging.getLogger(__name__)

_PRIMITIVE_TAGS = {bool: "boolean", int: "integer", float: "float", str: "string"}


@dataclass(eq=False, kw_only=True)
class Entity:
    """
    Base class for entity models.

    Subclasses are dataclasses declaring their fields. Entities compare and hash
    by identity, matching the way the storage layer tracks them.

    Attributes:
        last_update_date (datetime): Time of the last modification, defaults to creation time
        last_update_user_id (int): Id of the user who last modified the entity, 0 if unknown

    Example:
        >>> @dataclass(eq=False)
        ... class Team(Entity):
        ...     id: Optional[int] = None
        ...     name: Optional[str] = None
        ...     members: List["User"] = collection_field()
    """

    last_update_date: datetime = timestamp_field(default_factory=now)
    last_update_user_id: int = 0

    def __new__(cls, *args: Any, **kwargs: Any) -> "Entity":
        if cls is Entity:
            raise TypeError("Entity is abstract; subclass it to declare fields")
        return super().__new__(cls)

    @classmethod
    def field_registry(cls) -> FieldRegistry:
        """Get the field registry of this entity kind."""
        return FieldRegistry.for_class(cls, Entity)

    def _spec(self, name: str, accessor: str) -> FieldSpec:
        spec = self.field_registry().resolve(name)
        if spec is None:
            raise UndefinedMemberError(
                f"Call to undefined accessor {type(self).__name__}.{accessor}({name!r})"
            )
        return spec

    def get(self, name: str) -> Any:
        """
        Get the value of a field by name.

        Args:
            name: Field name, in snake_case or camelCase

        Returns:
            The current value

        Raises:
            UndefinedMemberError: If the entity has no readable field of that name
        """
        spec = self._spec(name, "get")
        if not spec.readable:
            raise UndefinedMemberError(
                f"Call to undefined accessor {type(self).__name__}.get({name!r})"
            )
        return getattr(self, spec.name)

    def set(self, name: str, value: Any) -> "Entity":
        """
        Set the value of a field by name.

        Args:
            name: Field name, in snake_case or camelCase
            value: New value

        Returns:
            The entity itself, for chaining

        Raises:
            UndefinedMemberError: If the entity has no writable field of that name
        """
        spec = self._spec(name, "set")
        if not spec.writable:
            raise UndefinedMemberError(
                f"Call to undefined accessor {type(self).__name__}.set({name!r})"
            )
        setattr(self, spec.name, value)
        return self

    def has(self, name: str) -> bool:
        """Check whether a field exists and is not None."""
        spec = self.field_registry().resolve(name)
        if spec is None or not spec.readable:
            return False
        return getattr(self, spec.name) is not None

    def get_id(self) -> Any:
        """Get the unique identifier of this entity, or None if the kind has no id field."""
        spec = self.field_registry().resolve("id")
        if spec is None:
            return None
        return getattr(self, spec.name)

    def to_plain_object(
        self,
        include_entities: bool = False,
        include_collections: bool = False,
        by_alias: bool = False,
    ) -> Dict[str, Any]:
        """
        Convert the entity to a plain dictionary.

        Args:
            include_entities: Include fields which reference other entities
            include_collections: Include fields which are collections of other entities
            by_alias: Emit camelCase keys instead of the declared field names

        Returns:
            Dict[str, Any]: JSON-compatible dictionary in field declaration order
        """
        from ..serialization import PlainObjectSerializer

        serializer = PlainObjectSerializer(
            include_entities=include_entities,
            include_collections=include_collections,
            by_alias=by_alias,
        )
        return serializer.serialize(self)

    def populate_from(self, data: Mapping[str, Any]) -> None:
        """
        Set fields using keys and values from a mapping.

        Keys that are not applicable to this entity are ignored. Collections
        cannot be filled this way. Strings given for timestamp fields are parsed
        as RFC3339; unparseable strings are stored unchanged.

        Args:
            data: Field names (any accepted spelling) mapped to values
        """
        registry = self.field_registry()
        for key, value in data.items():
            spec = registry.resolve(key)
            if spec is None or not spec.writable:
                logger.debug("Ignoring unknown key %r for %s", key, type(self).__name__)
                continue
            if spec.kind is FieldKind.COLLECTION:
                logger.debug("Skipping collection %r for %s", key, type(self).__name__)
                continue
            if spec.kind is FieldKind.TIMESTAMP and isinstance(value, str):
                parsed = string_to_date(value)
                if parsed is not None:
                    value = parsed
                else:
                    logger.debug("Keeping unparseable timestamp %r for %r", value, key)
            setattr(self, spec.name, value)

    def validate_for_insert(self, store: Optional["StorageInterface"] = None) -> List[ValidationError]:
        """
        Check whether the entity would be valid for insertion into a datastore.

        Args:
            store: The store the entity would be inserted into. If provided,
                additional validation (such as uniqueness) is possible.

        Returns:
            List[ValidationError]: Errors found, empty if the entity is valid
        """
        return []

    def validate_for_update(self, store: Optional["StorageInterface"] = None) -> List[ValidationError]:
        """
        Check whether the entity would be valid for updating a datastore.

        Args:
            store: The store where the entity resides. If provided, additional
                validation is possible.

        Returns:
            List[ValidationError]: Errors found, empty if the entity is valid
        """
        return []

    @classmethod
    def structural_schema(cls, by_alias: bool = False) -> Dict[str, Union[str, type]]:
        """
        Derive the structural type tags of this entity kind's stored fields.

        The result is suitable as the ``allowed`` argument of
        StructuralValidator.get_errors for payloads aimed at populate_from.

        Args:
            by_alias: Key the schema by camelCase names instead of declared names

        Returns:
            Dict[str, Union[str, type]]: Field name to type tag
        """
        schema: Dict[str, Union[str, type]] = {}
        for spec in cls.field_registry().stored_fields():
            schema[spec.alias if by_alias else spec.name] = _type_tag(spec)
        return schema


def _type_tag(spec: FieldSpec) -> Union[str, type]:
    if spec.kind is FieldKind.COLLECTION:
        return "array"
    if spec.kind is FieldKind.TIMESTAMP:
        return "string"
    if spec.kind is FieldKind.REFERENCE:
        return "object"

    annotation = unwrap_optional(spec.annotation)
    origin = get_origin(annotation) or annotation
    if origin in _PRIMITIVE_TAGS:
        return _PRIMITIVE_TAGS[origin]
    if origin in (list, tuple, set, frozenset):
        return "array"
    if origin is dict:
        return "object"
    if isinstance(origin, type) and issubclass(origin, Entity):
        return "object"
    if isinstance(origin, type):
        return origin
    # Any, multi-member unions and unresolved forward references
    return object
