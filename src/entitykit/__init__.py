"""
entitykit - Base layer for persisted domain entities

This package provides the common foundation for entity models:

- Generic, name-driven field access on dataclass entities
- Cycle-safe conversion of entity graphs to plain dictionaries
- Bulk population from untyped input with RFC3339 timestamp parsing
- Structural and JSON schema validation of key/value payloads
- Aggregated validation errors for presentation to API clients

Storage is not part of the package; entities only see it through the
StorageInterface protocol during validation.
"""

__version__ = "0.1.0"

# Version compatibility check
import sys

if sys.version_info < (3, 10):
    raise RuntimeError("entitykit requires Python 3.10 or higher")

import logging

# Import commonly used components for easier access
from .core import (
    Entity,
    ErrorKind,
    StorageInterface,
    ValidationError,
    collection_field,
    ensure_valid,
    populate_and_validate,
    timestamp_field,
)
from .exceptions import ConfigurationError, UndefinedMemberError, ValidationException
from .utils.validation import JsonSchemaValidator, StructuralValidator, ValidationResult

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Entity",
    "ErrorKind",
    "StorageInterface",
    "ValidationError",
    "collection_field",
    "ensure_valid",
    "populate_and_validate",
    "timestamp_field",
    "ConfigurationError",
    "UndefinedMemberError",
    "ValidationException",
    "JsonSchemaValidator",
    "StructuralValidator",
    "ValidationResult",
]
