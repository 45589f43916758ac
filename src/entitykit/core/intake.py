"""
Population and validation of entities from untyped input.

This module ties the pieces together for the usual write path:
1. Check the payload's structure (unexpected keys, wrong value types)
2. Optionally check it against a JSON schema
3. Populate the entity from the keys that passed
4. Run the entity's own insert or update validation

Every error from every step is collected into one ValidationResult. Only
ensure_valid raises, and only after all steps have run.
"""

import logging
from typing import Any, Mapping, Optional, TypeVar

from ..utils.validation import JsonSchemaValidator, StructuralValidator, TypeTag, ValidationResult
from .models.entity import Entity
from .types import StorageInterface

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Entity)


def validate_entity(
    entity: Entity, store: Optional[StorageInterface] = None, for_update: bool = False
) -> ValidationResult:
    """
    Run the entity's insert or update validation hook.

    Args:
        entity: Entity to check
        store: Storage available to the hook for cross-entity checks
        for_update: Use validate_for_update instead of validate_for_insert

    Returns:
        ValidationResult: Errors reported by the hook
    """
    if for_update:
        return ValidationResult(list(entity.validate_for_update(store)))
    return ValidationResult(list(entity.validate_for_insert(store)))


def populate_and_validate(
    entity: Entity,
    data: Mapping[str, Any],
    allowed: Optional[Mapping[str, TypeTag]] = None,
    store: Optional[StorageInterface] = None,
    for_update: bool = False,
    json_schema: Optional[JsonSchemaValidator] = None,
    by_alias: bool = False,
) -> ValidationResult:
    """
    Populate an entity from untyped input and validate both.

    Keys rejected by structural or schema validation are not applied to the
    entity, so domain validation only ever sees well-typed values.

    Args:
        entity: Entity to populate
        data: Untyped input
        allowed: Permitted keys and type tags; derived from the entity's
            annotations when omitted
        store: Storage available to the entity's validation hook
        for_update: Validate for update instead of insert
        json_schema: Additional schema the payload must satisfy
        by_alias: Derive the schema keyed by camelCase names, matching
            to_plain_object(by_alias=True) output; ignored when allowed is given

    Returns:
        ValidationResult: All errors found, in step order
    """
    if allowed is None:
        allowed = type(entity).structural_schema(by_alias=by_alias)

    result = ValidationResult(StructuralValidator.get_errors(data, allowed))
    if json_schema is not None:
        result.extend(json_schema.get_errors(dict(data)))

    rejected = {error.context.split(":", 1)[0] for error in result.errors if error.context}
    entity.populate_from({key: value for key, value in data.items() if str(key) not in rejected})

    result.extend(validate_entity(entity, store, for_update).errors)
    if not result.is_valid:
        logger.debug(
            "%s failed validation with %d error(s)", type(entity).__name__, len(result.errors)
        )
    return result


def ensure_valid(
    entity: E,
    data: Mapping[str, Any],
    allowed: Optional[Mapping[str, TypeTag]] = None,
    store: Optional[StorageInterface] = None,
    for_update: bool = False,
    json_schema: Optional[JsonSchemaValidator] = None,
    by_alias: bool = False,
) -> E:
    """
    Populate and validate an entity, raising if anything is wrong.

    Takes the same arguments as populate_and_validate.

    Returns:
        The populated entity

    Raises:
        ValidationException: Carrying every error found
    """
    populate_and_validate(
        entity, data, allowed, store, for_update, json_schema, by_alias
    ).raise_for_errors()
    return entity
