"""
Enumerations for validation error kinds and entity field kinds.

This module defines the enumeration types shared by the entity base class,
the serializer and the validators:
- ErrorKind: Classifies a single validation defect; values are the wire codes
  exposed to API consumers
- FieldKind: Classifies how an entity field takes part in serialization and
  bulk population
"""

from enum import Enum


class ErrorKind(Enum):
    """
    Enumeration of the standard validation error kinds.

    A validator should produce no more than one error of each kind for a given
    context. The values are stable string codes suitable for serialized output.
    """

    CONFLICTING = "conflictingValue"  # Conflicts with model state or another model
    INVALID = "notValid"  # Generic rule failure
    MISSING = "isEmpty"  # Required value absent or empty
    NOT_NUMBER = "notDigits"  # Number expected, conversion impossible
    TOO_LONG = "stringLengthTooLong"  # String exceeds maximum length
    TOO_SHORT = "stringLengthTooShort"  # String below minimum length
    UNRECOGNIZED = "unrecognized"  # Property is not part of the model


class FieldKind(Enum):
    """
    Enumeration of entity field kinds.

    The kind decides how the field is treated by the serializer and by
    bulk population:
    - SCALAR: Stored and emitted as-is (nested entities are still detected by value)
    - REFERENCE: Annotated as a nested entity; expanded only on request
    - TIMESTAMP: Strings are parsed as RFC3339 during population
    - COLLECTION: Ordered collection of nested entities, never bulk-populated
    """

    SCALAR = "scalar"
    REFERENCE = "reference"
    TIMESTAMP = "timestamp"
    COLLECTION = "collection"
