"""
Custom exceptions for the entity base layer.

This module defines the exceptions raised by entitykit. Validation itself never
raises: validators return lists of ValidationError records, and only the
orchestration boundary turns a non-empty list into a ValidationException.
"""

from typing import TYPE_CHECKING, Dict, Iterable, List, Optional

if TYPE_CHECKING:
    from .core.models.validation_error import ValidationError


class ValidationException(Exception):
    """
    Raised when user-supplied input fails validation.

    Carries every ValidationError collected during a validation pass so callers
    can present them all at once.

    Examples:
        * Unrecognized or mistyped keys in a request payload
        * Missing required entity fields
        * Uniqueness conflicts found through the storage layer
    """

    def __init__(self, errors: Iterable["ValidationError"]):
        super().__init__("Input failed validation")
        self._errors: List["ValidationError"] = list(errors)

    def __str__(self) -> str:
        """Format validation error message."""
        return f"Validation Error: {super().__str__()}"

    @property
    def errors(self) -> List["ValidationError"]:
        """The validation errors, in the order they were reported."""
        return list(self._errors)

    def get_general_message(self) -> Optional[str]:
        """
        Get the first validation message that has no context set.

        Returns:
            The message, or None if every error refers to a specific field
        """
        for error in self._errors:
            if error.context is None:
                return error.message
        return None

    def to_context_dict(self) -> Dict[str, str]:
        """
        Get all validation messages that specify a context.

        Later errors for the same context overwrite earlier ones.

        Returns:
            Dict[str, str]: Mapping of context to message
        """
        result: Dict[str, str] = {}
        for error in self._errors:
            if error.context:
                result[error.context] = error.message
        return result


class UndefinedMemberError(AttributeError):
    """
    Raised when a generic accessor is called with a name the entity does not declare.

    This signals a programming error rather than bad input data and is never
    converted into a ValidationError.

    Examples:
        * entity.get("nickname") on an entity without a nickname field
        * entity.set("Id", 5) on an entity kind without identity
    """


class ConfigurationError(Exception):
    """
    Raised when configuration is invalid.

    Examples:
        * Empty internal field prefix
        * Unsupported default timezone name
    """
