"""
Validation package for entitykit.

This package provides the validators that check untyped input before it
reaches an entity, and the result type they report through.
"""

from .base import ValidationResult
from .schema import JsonSchemaValidator
from .structural import BUILTIN_TAGS, StructuralValidator, TypeTag

__all__ = [
    "ValidationResult",
    "JsonSchemaValidator",
    "StructuralValidator",
    "BUILTIN_TAGS",
    "TypeTag",
]
