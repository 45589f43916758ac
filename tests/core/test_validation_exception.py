"""
Tests for custom exceptions.
"""

from entitykit.core.models import ValidationError
from entitykit.exceptions import ConfigurationError, UndefinedMemberError, ValidationException


def test_validation_exception_message():
    """Test validation exception message formatting."""
    error = ValidationException([])
    assert str(error) == "Validation Error: Input failed validation"


def test_validation_exception_views():
    """Test general message and context mapping."""
    exc = ValidationException(
        [ValidationError.missing("required", "name"), ValidationError.invalid("bad", None)]
    )

    assert exc.get_general_message() == "bad"
    assert exc.to_context_dict() == {"name": "required"}
    assert len(exc.errors) == 2


def test_validation_exception_first_general_message_wins():
    """Test the first context-free error supplies the general message."""
    exc = ValidationException([ValidationError.invalid("first"), ValidationError.invalid("second")])
    assert exc.get_general_message() == "first"


def test_validation_exception_no_general_message():
    """Test general message is None when every error has a context."""
    exc = ValidationException([ValidationError.missing("required", "name")])
    assert exc.get_general_message() is None


def test_validation_exception_later_context_wins():
    """Test later errors overwrite earlier ones for the same context."""
    exc = ValidationException(
        [
            ValidationError.missing("required", "name"),
            ValidationError.too_long("too long", "name"),
            ValidationError.invalid("bad", "email"),
        ]
    )
    assert exc.to_context_dict() == {"name": "too long", "email": "bad"}


def test_validation_exception_skips_empty_context():
    """Test an empty-string context is neither general nor contextual."""
    exc = ValidationException([ValidationError.invalid("blank", "")])

    assert exc.to_context_dict() == {}
    assert exc.get_general_message() is None


def test_validation_exception_errors_copy():
    """Test callers cannot mutate the carried errors."""
    exc = ValidationException([ValidationError.invalid("bad")])
    exc.errors.clear()
    assert len(exc.errors) == 1


def test_exception_hierarchy():
    """Test exception base classes."""
    assert issubclass(UndefinedMemberError, AttributeError)
    assert issubclass(ValidationException, Exception)
    assert issubclass(ConfigurationError, Exception)
