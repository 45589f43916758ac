"""
Base validation components.

ValidationResult is the typed outcome of a validation pass: the collected
errors plus the means to turn them into a ValidationException at the
orchestration boundary.
"""

from dataclasses import dataclass, field
from typing import Iterable, List

from ...core.models.validation_error import ValidationError
from ...exceptions import ValidationException


@dataclass
class ValidationResult:
    """
    Container for the errors found by one validation pass.

    Attributes:
        errors (List[ValidationError]): Errors in the order they were found
    """

    errors: List[ValidationError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """Whether no errors were found."""
        return not self.errors

    def extend(self, errors: Iterable[ValidationError]) -> "ValidationResult":
        """Append errors to this result and return it."""
        self.errors.extend(errors)
        return self

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        """Get a new result holding the errors of both results."""
        return ValidationResult(self.errors + other.errors)

    def raise_for_errors(self) -> None:
        """
        Raise if the result holds any errors.

        Raises:
            ValidationException: Carrying every collected error
        """
        if self.errors:
            raise ValidationException(self.errors)
