"""
Validation error record.

A ValidationError describes one problem with user-supplied data. Validators
return lists of them; nothing in this module raises.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..enums import ErrorKind


@dataclass(frozen=True)
class ValidationError:
    """
    Communicates a problem with some user-supplied data.

    Attributes:
        kind (ErrorKind): The category of the problem
        message (str): User-friendly description of the problem
        context (Optional[str]): The property that contained the error, if
            applicable. Colons separate path segments for nested structures,
            e.g. "manager:postalAddress:city"
    """

    kind: ErrorKind
    message: str
    context: Optional[str] = None

    @classmethod
    def conflicting(cls, message: str, context: Optional[str] = None) -> "ValidationError":
        """Value conflicts with the current state of the model, or with another model."""
        return cls(ErrorKind.CONFLICTING, message, context)

    @classmethod
    def invalid(cls, message: str, context: Optional[str] = None) -> "ValidationError":
        """Generic rule failure, when no more specific kind applies."""
        return cls(ErrorKind.INVALID, message, context)

    @classmethod
    def missing(cls, message: str, context: Optional[str] = None) -> "ValidationError":
        """Required property absent, or empty where a value is required."""
        return cls(ErrorKind.MISSING, message, context)

    @classmethod
    def not_number(cls, message: str, context: Optional[str] = None) -> "ValidationError":
        """Number expected but another type was supplied."""
        return cls(ErrorKind.NOT_NUMBER, message, context)

    @classmethod
    def too_long(cls, message: str, context: Optional[str] = None) -> "ValidationError":
        """String exceeds the maximum length allowed."""
        return cls(ErrorKind.TOO_LONG, message, context)

    @classmethod
    def too_short(cls, message: str, context: Optional[str] = None) -> "ValidationError":
        """String does not meet the minimum length required."""
        return cls(ErrorKind.TOO_SHORT, message, context)

    @classmethod
    def unrecognized(cls, message: str, context: Optional[str] = None) -> "ValidationError":
        """Property supplied which is not part of the model."""
        return cls(ErrorKind.UNRECOGNIZED, message, context)

    def to_dict(self) -> Dict[str, Any]:
        """Render the error as a JSON-compatible dictionary."""
        return {"type": self.kind.value, "message": self.message, "context": self.context}
