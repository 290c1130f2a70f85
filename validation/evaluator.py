"""Pure form validation: (values, schema) -> ValidationResult."""

from typing import Any, Dict, Iterable, Mapping

from contracts import RoleSchema, ValidationResult
from validation.field_rules import validate_field
from validation.cross_field import exclusion_errors


def validate_form(values: Mapping[str, Any], schema: RoleSchema) -> ValidationResult:
    """Evaluate every field of the schema plus all cross-field rules."""
    return ValidationResult(errors=validate_keys(values, schema, schema.keys()))


def validate_keys(
    values: Mapping[str, Any],
    schema: RoleSchema,
    keys: Iterable[str],
) -> Dict[str, str]:
    """Errors for a subset of keys, in declaration order.

    A per-field error takes precedence over a cross-field error on the
    same key.
    """
    wanted = set(keys)
    cross = exclusion_errors(schema, values)
    errors: Dict[str, str] = {}
    for field in schema.fields:
        if field.key not in wanted:
            continue
        message = validate_field(field, values.get(field.key)) or cross.get(field.key)
        if message:
            errors[field.key] = message
    return errors
