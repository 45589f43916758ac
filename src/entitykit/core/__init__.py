"""Core entity functionality."""

from .dates import date_to_string, now, string_to_date
from .enums import ErrorKind, FieldKind
from .models import Entity, FieldRegistry, ValidationError, collection_field, timestamp_field
from .serialization import PlainObjectSerializer
from .types import StorageInterface
from .intake import ensure_valid, populate_and_validate, validate_entity

__all__ = [
    "date_to_string",
    "now",
    "string_to_date",
    "ErrorKind",
    "FieldKind",
    "Entity",
    "FieldRegistry",
    "ValidationError",
    "collection_field",
    "timestamp_field",
    "PlainObjectSerializer",
    "StorageInterface",
    "ensure_valid",
    "populate_and_validate",
    "validate_entity",
]
