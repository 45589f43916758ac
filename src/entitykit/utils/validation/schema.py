"""
JSON Schema validation of payloads.

JsonSchemaValidator checks a payload against a JSON schema and reports every
violation as a ValidationError, so schema checks can be combined with
structural and domain validation in one pass. Contexts are the colon-joined
path of the offending value (e.g. "manager:postalAddress:city").
"""

import logging
import re
from typing import Any, Dict, Iterator, List, Optional

from jsonschema import Draft7Validator, FormatChecker
from jsonschema import ValidationError as JsonSchemaError
from jsonschema.exceptions import SchemaError
from jsonschema.validators import validator_for

from ...core.enums import ErrorKind
from ...core.models.validation_error import ValidationError
from ...exceptions import ConfigurationError

logger = logging.getLogger(__name__)

_NUMERIC_TYPES = {"number", "integer"}

_KEYWORD_KINDS = {
    "required": ErrorKind.MISSING,
    "minLength": ErrorKind.TOO_SHORT,
    "maxLength": ErrorKind.TOO_LONG,
    "additionalProperties": ErrorKind.UNRECOGNIZED,
}


class JsonSchemaValidator:
    """
    Validator for payloads described by a JSON schema.

    The schema's ``$schema`` keyword picks the draft; Draft 7 is used when it
    is absent.

    Attributes:
        schema (Dict[str, Any]): The JSON schema

    Example:
        >>> validator = JsonSchemaValidator({
        ...     "type": "object",
        ...     "properties": {"name": {"type": "string", "maxLength": 10}},
        ...     "required": ["name"],
        ... })
        >>> [error.context for error in validator.get_errors({})]
        ['name']
    """

    def __init__(self, schema: Dict[str, Any]):
        """
        Initialize the validator.

        Args:
            schema: JSON schema definition as a dictionary

        Raises:
            ConfigurationError: If the schema itself is invalid
        """
        validator_cls = validator_for(schema, default=Draft7Validator)
        try:
            validator_cls.check_schema(schema)
        except SchemaError as e:
            raise ConfigurationError(f"Invalid JSON schema: {e.message}") from e
        self.schema = schema
        self._validator = validator_cls(schema, format_checker=FormatChecker())

    def get_errors(self, payload: Any) -> List[ValidationError]:
        """
        Validate a payload against the schema.

        Args:
            payload: Decoded JSON value to validate

        Returns:
            List[ValidationError]: Every violation found, ordered by path
        """
        errors: List[ValidationError] = []
        for error in sorted(self._validator.iter_errors(payload), key=lambda e: list(map(str, e.path))):
            errors.extend(self._convert(error))
        if errors:
            logger.debug("Schema validation found %d error(s)", len(errors))
        return errors

    def _convert(self, error: JsonSchemaError) -> Iterator[ValidationError]:
        path = [str(part) for part in error.absolute_path]

        if error.validator == "required":
            name = self._missing_property(error)
            yield ValidationError.missing("Value is required", _context(path + [name] if name else path))
            return

        if error.validator == "additionalProperties" and isinstance(error.instance, dict):
            unexpected = self._unexpected_properties(error)
            for key in unexpected:
                yield ValidationError.unrecognized("Unrecognized property", _context(path + [key]))
            if unexpected:
                return

        yield ValidationError(self._kind(error), error.message, _context(path))

    @staticmethod
    def _kind(error: JsonSchemaError) -> ErrorKind:
        if error.validator == "type":
            expected = error.validator_value
            expected = set(expected) if isinstance(expected, list) else {expected}
            if expected and expected <= _NUMERIC_TYPES:
                return ErrorKind.NOT_NUMBER
            return ErrorKind.INVALID
        return _KEYWORD_KINDS.get(error.validator, ErrorKind.INVALID)

    @staticmethod
    def _missing_property(error: JsonSchemaError) -> Optional[str]:
        instance = error.instance if isinstance(error.instance, dict) else {}
        for name in error.validator_value:
            if name not in instance and error.message.startswith(repr(name)):
                return name
        return None

    @staticmethod
    def _unexpected_properties(error: JsonSchemaError) -> List[str]:
        declared = error.schema.get("properties", {})
        patterns = [re.compile(p) for p in error.schema.get("patternProperties", {})]
        return [
            key
            for key in error.instance
            if key not in declared and not any(p.search(key) for p in patterns)
        ]


def _context(path: List[str]) -> Optional[str]:
    return ":".join(path) if path else None
