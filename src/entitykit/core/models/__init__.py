"""
Core domain models package for entitykit.

This package provides the Entity base class, its field markers and registry,
and the ValidationError record.
"""

from .entity import Entity
from .fields import FieldRegistry, FieldSpec, camel_case, collection_field, timestamp_field
from .validation_error import ValidationError

__all__ = [
    # Entity base
    "Entity",
    # Field declaration
    "FieldRegistry",
    "FieldSpec",
    "camel_case",
    "collection_field",
    "timestamp_field",
    # Validation records
    "ValidationError",
]
