"""
Tests for the validation error record.
"""

import dataclasses

import pytest

from entitykit.core.enums import ErrorKind
from entitykit.core.models import ValidationError


@pytest.mark.parametrize(
    "factory, kind",
    [
        (ValidationError.conflicting, ErrorKind.CONFLICTING),
        (ValidationError.invalid, ErrorKind.INVALID),
        (ValidationError.missing, ErrorKind.MISSING),
        (ValidationError.not_number, ErrorKind.NOT_NUMBER),
        (ValidationError.too_long, ErrorKind.TOO_LONG),
        (ValidationError.too_short, ErrorKind.TOO_SHORT),
        (ValidationError.unrecognized, ErrorKind.UNRECOGNIZED),
    ],
)
def test_convenience_constructors(factory, kind):
    """Test each constructor sets its kind."""
    error = factory("message", "field")

    assert error.kind is kind
    assert error.message == "message"
    assert error.context == "field"


def test_context_defaults_to_none():
    """Test errors without context."""
    assert ValidationError.invalid("bad").context is None


def test_error_is_immutable():
    """Test errors cannot be modified after construction."""
    error = ValidationError.missing("required", "name")
    with pytest.raises(dataclasses.FrozenInstanceError):
        error.message = "changed"


def test_error_kind_codes():
    """Test the stable wire codes of the error kinds."""
    assert ErrorKind.CONFLICTING.value == "conflictingValue"
    assert ErrorKind.INVALID.value == "notValid"
    assert ErrorKind.MISSING.value == "isEmpty"
    assert ErrorKind.NOT_NUMBER.value == "notDigits"
    assert ErrorKind.TOO_LONG.value == "stringLengthTooLong"
    assert ErrorKind.TOO_SHORT.value == "stringLengthTooShort"
    assert ErrorKind.UNRECOGNIZED.value == "unrecognized"


def test_to_dict():
    """Test rendering an error for API output."""
    error = ValidationError.too_long("Too long", "manager:postalAddress:city")
    assert error.to_dict() == {
        "type": "stringLengthTooLong",
        "message": "Too long",
        "context": "manager:postalAddress:city",
    }
