"""
Tests for populating and validating entities from untyped input.
"""

from datetime import datetime, timezone

import pytest

from entitykit.core.enums import ErrorKind
from entitykit.core.intake import ensure_valid, populate_and_validate, validate_entity
from entitykit.exceptions import ValidationException
from entitykit.utils.validation import JsonSchemaValidator
from sample_entities import AuditNote, User


def _summary(result):
    return [(error.kind, error.context) for error in result.errors]


def test_valid_input_populates_entity():
    """Test a clean payload is applied and passes."""
    user = User()
    result = populate_and_validate(user, {"name": "ada", "email": "ada@example.com"})

    assert result.is_valid
    assert user.name == "ada"
    assert user.email == "ada@example.com"


def test_timestamp_strings_are_parsed():
    """Test timestamps in the payload become datetimes."""
    user = User()
    populate_and_validate(user, {"name": "ada", "created_date": "2024-01-02T03:04:05+00:00"})
    assert user.created_date == datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


def test_mistyped_key_not_applied():
    """Test rejected keys never reach the entity and hooks still run."""
    user = User()
    result = populate_and_validate(user, {"name": 5})

    assert user.name is None
    assert _summary(result) == [(ErrorKind.INVALID, "name"), (ErrorKind.MISSING, "name")]


def test_unrecognized_key_reported():
    """Test unknown keys are reported while the rest is applied."""
    user = User()
    result = populate_and_validate(user, {"nickname": "x", "name": "ada"})

    assert _summary(result) == [(ErrorKind.UNRECOGNIZED, "nickname")]
    assert user.name == "ada"


def test_internal_field_rejected():
    """Test internal-use fields are not part of the derived schema."""
    user = User()
    result = populate_and_validate(user, {"name": "ada", "_password_hash": "x"})

    assert _summary(result) == [(ErrorKind.UNRECOGNIZED, "_password_hash")]
    assert user._password_hash is None


def test_explicit_allowed_map():
    """Test an explicit allowed map replaces the derived schema."""
    user = User()
    result = populate_and_validate(user, {"name": "ada", "email": "a@b"}, allowed={"name": "string"})

    assert _summary(result) == [(ErrorKind.UNRECOGNIZED, "email")]
    assert user.email is None


def test_camel_case_payload():
    """Test camelCase payloads validate against the aliased schema."""
    user = User()
    result = populate_and_validate(
        user,
        {"name": "ada", "createdDate": "2024-01-02T03:04:05+00:00"},
        allowed=User.structural_schema(by_alias=True),
    )

    assert result.is_valid
    assert user.created_date.year == 2024


def test_conflict_found_through_storage(storage):
    """Test domain validation can consult storage."""
    user = User()
    result = populate_and_validate(user, {"name": "bob", "email": "ada@example.com"}, store=storage)
    assert _summary(result) == [(ErrorKind.CONFLICTING, "email")]


def test_update_validation():
    """Test for_update selects the update hook."""
    user = User()
    result = populate_and_validate(user, {"name": "bob"}, for_update=True)
    assert _summary(result) == [(ErrorKind.INVALID, None)]


def test_json_schema_errors_combined():
    """Test schema errors are collected and their keys left unapplied."""
    schema = JsonSchemaValidator(
        {
            "type": "object",
            "properties": {"email": {"type": "string", "maxLength": 5}},
            "required": ["email"],
        }
    )
    user = User()
    result = populate_and_validate(user, {"name": "ada", "email": "ada@example.com"}, json_schema=schema)

    assert _summary(result) == [(ErrorKind.TOO_LONG, "email")]
    assert user.email is None
    assert user.name == "ada"


def test_validate_entity():
    """Test the hooks can run on their own."""
    assert validate_entity(User(name="ada")).is_valid
    assert not validate_entity(User(name="ada"), for_update=True).is_valid
    assert validate_entity(AuditNote(), for_update=True).is_valid


def test_ensure_valid_returns_entity():
    """Test ensure_valid hands back the populated entity."""
    user = User()
    assert ensure_valid(user, {"name": "ada"}) is user


def test_ensure_valid_raises_with_all_errors(storage):
    """Test every collected error is carried by the exception."""
    with pytest.raises(ValidationException) as exc_info:
        ensure_valid(User(), {"name": 5, "email": "ada@example.com", "x": 1}, store=storage)

    exc = exc_info.value
    assert [error.kind for error in exc.errors] == [
        ErrorKind.INVALID,
        ErrorKind.UNRECOGNIZED,
        ErrorKind.MISSING,
        ErrorKind.CONFLICTING,
    ]
    assert exc.to_context_dict() == {
        "name": "Name is required",
        "x": "Unrecognized property",
        "email": "Email is already in use",
    }
    assert exc.get_general_message() is None


def test_ensure_valid_general_message():
    """Test context-free errors surface as the general message."""
    with pytest.raises(ValidationException) as exc_info:
        ensure_valid(User(), {"name": "bob"}, for_update=True)
    assert exc_info.value.get_general_message() == "Only stored users can be updated"


def test_camel_case_keys_by_alias():
    """Test camelCase payloads are accepted when by_alias is set."""
    user = ensure_valid(User(name="x"), {"lastUpdateUserId": 3, "name": "ada"}, by_alias=True)

    assert user.last_update_user_id == 3
    assert user.name == "ada"


def test_camel_case_keys_rejected_by_default():
    """Test the default schema is keyed by declared names."""
    result = populate_and_validate(User(name="x"), {"lastUpdateUserId": 3})
    assert _summary(result) == [(ErrorKind.UNRECOGNIZED, "lastUpdateUserId")]


def test_aliased_output_round_trips(user):
    """Test to_plain_object(by_alias=True) output feeds back through ensure_valid."""
    user.last_update_date = datetime(2024, 1, 2, 3, 4, 5, 250000, tzinfo=timezone.utc)
    user.created_date = datetime(2023, 6, 1, tzinfo=timezone.utc)
    payload = user.to_plain_object(by_alias=True)

    copy = ensure_valid(User(), payload, by_alias=True)

    assert copy.to_plain_object() == user.to_plain_object()
    assert copy.created_date == user.created_date
