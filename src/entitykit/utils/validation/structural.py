"""
Structural validation of untyped key/value payloads.

StructuralValidator checks that a payload holds no unexpected keys and that
each value has the expected type. Type tags are:

- boolean, integer, float (alias double), string
- array: a dense list (or a dict keyed 0..n-1)
- object: an associative dict
- a class, its name or its dotted path: an instance of that class or a subclass

None always validates. The Python names bool, int, str, list and dict are
accepted as aliases, and the classes themselves may be given as tags.
"""

import logging
from typing import Any, List, Mapping, Union

from ...core.models.validation_error import ValidationError

logger = logging.getLogger(__name__)

TypeTag = Union[str, type]

BUILTIN_TAGS = frozenset({"boolean", "integer", "float", "string", "array", "object"})

_TAG_ALIASES = {
    "bool": "boolean",
    "int": "integer",
    "double": "float",
    "str": "string",
    "list": "array",
    "dict": "object",
}

_CLASS_TAGS = {
    bool: "boolean",
    int: "integer",
    float: "float",
    str: "string",
    list: "array",
    tuple: "array",
    dict: "object",
}


class StructuralValidator:
    """
    Validator for the shape of key/value input.

    All methods are static; the validator holds no state.
    """

    @staticmethod
    def get_errors(input: Mapping[Any, Any], allowed: Mapping[str, TypeTag]) -> List[ValidationError]:
        """
        Validate the keys and value types of a payload.

        Args:
            input: Payload to validate
            allowed: Permitted keys mapped to their expected type tags

        Returns:
            List[ValidationError]: One error per unrecognized key or mistyped value
        """
        errors: List[ValidationError] = []
        for key, val in input.items():
            context = str(key)
            if key not in allowed:
                errors.append(ValidationError.unrecognized("Unrecognized property", context))
                continue

            if val is None:
                continue

            expected = StructuralValidator.normalize_tag(allowed[key])
            if not StructuralValidator.is_expected_type(val, expected):
                errors.append(
                    ValidationError.invalid(
                        f'Incorrect type "{StructuralValidator.display_value_type(val)}", '
                        f'expecting "{StructuralValidator.display_tag(expected)}"',
                        context,
                    )
                )

        if errors:
            logger.debug("Structural validation found %d error(s)", len(errors))
        return errors

    @staticmethod
    def normalize_tag(tag: TypeTag) -> TypeTag:
        """Map aliases and builtin classes onto the canonical tag names."""
        if isinstance(tag, type):
            return _CLASS_TAGS.get(tag, tag)
        return _TAG_ALIASES.get(tag, tag)

    @staticmethod
    def is_expected_type(val: Any, tag: TypeTag) -> bool:
        """
        Check a non-None value against a normalized type tag.

        Args:
            val: Value to check
            tag: Normalized tag, see normalize_tag

        Returns:
            bool: True if the value satisfies the tag
        """
        if StructuralValidator._is_object(val):
            return StructuralValidator._is_instance_of(val, tag)
        if tag == "array":
            return StructuralValidator.could_be_conventional(val)
        if tag == "object":
            return StructuralValidator.could_be_associative(val)
        if tag == "float":
            return isinstance(val, (int, float)) and not isinstance(val, bool)
        if isinstance(tag, type):
            return isinstance(val, tag)
        return StructuralValidator._runtime_type(val) == tag

    @staticmethod
    def could_be_associative(val: Any) -> bool:
        """Check whether a value is empty or has at least one non-integer key."""
        if isinstance(val, (list, tuple)):
            return not val
        if not isinstance(val, dict):
            return False
        if not val:
            return True
        return any(not isinstance(key, int) or isinstance(key, bool) for key in val)

    @staticmethod
    def could_be_conventional(val: Any) -> bool:
        """Check whether a value is a dense, order-preserving sequence."""
        if isinstance(val, (list, tuple)):
            return True
        if not isinstance(val, dict):
            return False
        return list(val.keys()) == list(range(len(val)))

    @staticmethod
    def display_value_type(val: Any) -> str:
        """Get the human-readable type name of a value."""
        if isinstance(val, dict) and StructuralValidator.could_be_associative(val):
            return "object"
        if StructuralValidator._is_object(val):
            return type(val).__name__
        return StructuralValidator._runtime_type(val)

    @staticmethod
    def display_tag(tag: TypeTag) -> str:
        """Get the human-readable name of a normalized type tag."""
        if isinstance(tag, type):
            return tag.__name__
        return tag.replace("\\", ".").rsplit(".", 1)[-1]

    @staticmethod
    def _runtime_type(val: Any) -> str:
        if isinstance(val, bool):
            return "boolean"
        if isinstance(val, int):
            return "integer"
        if isinstance(val, float):
            return "float"
        if isinstance(val, str):
            return "string"
        if isinstance(val, (list, tuple, dict)):
            return "array"
        return "object"

    @staticmethod
    def _is_object(val: Any) -> bool:
        return StructuralValidator._runtime_type(val) == "object"

    @staticmethod
    def _is_instance_of(val: Any, tag: TypeTag) -> bool:
        if isinstance(tag, type):
            return isinstance(val, tag)
        if tag in BUILTIN_TAGS:
            return False
        for klass in type(val).__mro__:
            names = (klass.__name__, klass.__qualname__, f"{klass.__module__}.{klass.__qualname__}")
            if tag in names:
                return True
        return False

