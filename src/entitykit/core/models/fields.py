"""
Field markers and the per-class field registry.

Entity subclasses declare their fields as ordinary dataclass fields. Two markers
refine how a field is handled:

- timestamp_field(): RFC3339 strings are parsed into datetimes on population.
  Fields annotated ``datetime`` or ``Optional[datetime]`` get this behaviour
  without the marker.
- collection_field(): An ordered list of nested entities. Collections are
  serialized on request and are never touched by bulk population.

The registry maps every accepted spelling of a field name (snake_case,
camelCase and capitalized camelCase) to a FieldSpec, so generic accessors never
resolve attributes by building method names at runtime.
"""

import re
import typing
from dataclasses import MISSING, dataclass, field, fields, is_dataclass
from datetime import datetime
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union, get_args, get_origin

from ...config import get_settings
from ..enums import FieldKind

KIND_METADATA_KEY = "entitykit.kind"

_DATETIME_ANNOTATION = re.compile(
    r"^\s*(Optional\[\s*)?(datetime\.)?datetime(\s*\])?(\s*\|\s*None)?\s*$"
)


def timestamp_field(*, default: Any = None, default_factory: Any = MISSING, **kwargs: Any) -> Any:
    """
    Declare a timestamp field.

    Args:
        default: Default value, None unless given
        default_factory: Zero-argument callable producing the default
        **kwargs: Passed through to dataclasses.field

    Returns:
        A dataclass field marked as FieldKind.TIMESTAMP
    """
    metadata = {**kwargs.pop("metadata", {}), KIND_METADATA_KEY: FieldKind.TIMESTAMP}
    if default_factory is not MISSING:
        return field(default_factory=default_factory, metadata=metadata, **kwargs)
    return field(default=default, metadata=metadata, **kwargs)


def collection_field(**kwargs: Any) -> Any:
    """
    Declare an ordered collection of nested entities, defaulting to an empty list.

    Returns:
        A dataclass field marked as FieldKind.COLLECTION
    """
    metadata = {**kwargs.pop("metadata", {}), KIND_METADATA_KEY: FieldKind.COLLECTION}
    return field(default_factory=list, metadata=metadata, **kwargs)


def camel_case(name: str) -> str:
    """Convert a snake_case name to camelCase (last_update_date -> lastUpdateDate)."""
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def unwrap_optional(annotation: Any) -> Any:
    """Strip a single Optional[...] layer from an annotation."""
    if get_origin(annotation) is Union or type(annotation).__name__ == "UnionType":
        args = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def _is_datetime_annotation(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return bool(_DATETIME_ANNOTATION.match(annotation))
    return unwrap_optional(annotation) is datetime


def _infer_kind(annotation: Any, reference_base: Optional[type]) -> FieldKind:
    if _is_datetime_annotation(annotation):
        return FieldKind.TIMESTAMP
    target = unwrap_optional(annotation)
    if reference_base is not None and isinstance(target, type) and issubclass(target, reference_base):
        return FieldKind.REFERENCE
    return FieldKind.SCALAR


@dataclass(frozen=True)
class FieldSpec:
    """
    Description of one entity field.

    Attributes:
        name (str): Declared attribute name
        kind (FieldKind): How serialization and population treat the field
        annotation (Any): Resolved type annotation, or the raw string if it could not be resolved
        stored (bool): True for dataclass fields, False for properties
        readable (bool): Whether get() is supported
        writable (bool): Whether set() is supported
    """

    name: str
    kind: FieldKind
    annotation: Any = None
    stored: bool = True
    readable: bool = True
    writable: bool = True

    @property
    def alias(self) -> str:
        """camelCase spelling of the field name."""
        return camel_case(self.name)


class FieldRegistry:
    """
    Registry of the public fields of one entity class.

    Built once per (class, internal prefix) and cached. Names starting with the
    internal prefix are not registered and therefore invisible to accessors,
    population and serialization.
    """

    _cache: Dict[Tuple[type, str], "FieldRegistry"] = {}

    def __init__(
        self, entity_cls: type, internal_prefix: str, reference_base: Optional[type] = None
    ):
        """
        Build the registry for an entity class.

        Args:
            entity_cls: Dataclass-based entity class to inspect
            internal_prefix: Prefix of names to leave out
            reference_base: Base class of nested entities; fields annotated with a
                subclass of it become FieldKind.REFERENCE
        """
        if not is_dataclass(entity_cls):
            raise TypeError(f"{entity_cls.__name__} must be a dataclass")
        self.entity_cls = entity_cls
        self.internal_prefix = internal_prefix
        self._specs: Dict[str, FieldSpec] = {}
        self._lookup: Dict[str, str] = {}

        hints = self._type_hints(entity_cls)
        for item in fields(entity_cls):
            if item.name.startswith(internal_prefix):
                continue
            annotation = hints.get(item.name, item.type)
            kind = item.metadata.get(KIND_METADATA_KEY)
            if kind is None:
                kind = _infer_kind(annotation, reference_base)
            self._register(FieldSpec(name=item.name, kind=kind, annotation=annotation))

        for klass in reversed(entity_cls.__mro__):
            for name, attr in vars(klass).items():
                if not isinstance(attr, property) or name.startswith(internal_prefix):
                    continue
                if name in self._specs and self._specs[name].stored:
                    continue
                self._register(
                    FieldSpec(
                        name=name,
                        kind=FieldKind.SCALAR,
                        stored=False,
                        readable=attr.fget is not None,
                        writable=attr.fset is not None,
                    )
                )

    @staticmethod
    def _type_hints(entity_cls: type) -> Dict[str, Any]:
        try:
            return typing.get_type_hints(entity_cls)
        except (NameError, TypeError):
            # Unresolvable forward references; fall back to raw annotations
            return {}

    def _register(self, spec: FieldSpec) -> None:
        self._specs[spec.name] = spec
        for key in (spec.name, spec.alias, spec.alias[:1].upper() + spec.alias[1:]):
            self._lookup.setdefault(key, spec.name)

    @classmethod
    def for_class(cls, entity_cls: type, reference_base: Optional[type] = None) -> "FieldRegistry":
        """
        Get the cached registry for an entity class.

        Args:
            entity_cls: Entity class to look up
            reference_base: Base class of nested entities, see __init__

        Returns:
            FieldRegistry: Registry honouring the current internal prefix
        """
        prefix = get_settings().internal_prefix
        key = (entity_cls, prefix)
        registry = cls._cache.get(key)
        if registry is None:
            registry = cls(entity_cls, prefix, reference_base)
            cls._cache[key] = registry
        return registry

    @classmethod
    def clear_cache(cls) -> None:
        """Forget every cached registry."""
        cls._cache.clear()

    def resolve(self, name: str) -> Optional[FieldSpec]:
        """
        Find the field a name refers to.

        Args:
            name: Field name in any accepted spelling

        Returns:
            The FieldSpec, or None if the class has no such public field
        """
        canonical = self._lookup.get(name)
        if canonical is None:
            return None
        return self._specs[canonical]

    def stored_fields(self) -> Iterator[FieldSpec]:
        """Iterate the dataclass-backed fields in declaration order."""
        return (spec for spec in self._specs.values() if spec.stored)

    def names(self) -> List[str]:
        """Get the canonical names of all registered fields."""
        return list(self._specs)
