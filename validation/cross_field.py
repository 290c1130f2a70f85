"""Cross-field constraint evaluator.

Rules here cannot be expressed per field: an exclusion between a primary
enum and a dependent multi-enum, and the live length feedback of counted
text fields.
"""

from typing import Any, Dict, List, Mapping, Set

from contracts import (
    CrossFieldKind,
    FieldDefinition,
    FieldOption,
    LengthClass,
    LengthFeedback,
    RoleSchema,
)
from validation.field_rules import selected_values


def classify_length(length: int, min_length: int, max_length: int) -> LengthClass:
    """too_short below min_length, too_long above max_length, ok in between (inclusive)."""
    if length < min_length:
        return LengthClass.TOO_SHORT
    if length > max_length:
        return LengthClass.TOO_LONG
    return LengthClass.OK


def length_feedback(field: FieldDefinition, value: Any) -> LengthFeedback:
    """Running counter and classification for a counted field."""
    text = value if isinstance(value, str) else ""
    min_length = field.constraints.min_length or 0
    max_length = field.constraints.max_length or max(len(text), 1)
    return LengthFeedback(
        length=len(text),
        min_length=min_length,
        max_length=max_length,
        classification=classify_length(len(text), min_length, max_length),
    )


def counted_fields(schema: RoleSchema) -> List[FieldDefinition]:
    """Fields that display a live length counter."""
    return [f for f in schema.fields if f.show_counter]


def selectable_options(schema: RoleSchema, values: Mapping[str, Any], key: str) -> List[FieldOption]:
    """Options to offer for a field, minus whatever its exclusion primaries currently hold."""
    excluded = set()
    for rule in schema.cross_field_rules:
        if rule.kind == CrossFieldKind.EXCLUSION and rule.dependent_key == key:
            primary = values.get(rule.primary_key)
            if primary:
                excluded.add(primary)
    return [o for o in schema.field(key).options if o.value not in excluded]


def exclusion_errors(schema: RoleSchema, values: Mapping[str, Any]) -> Dict[str, str]:
    """Dependent fields whose selection collides with their primary value.

    Colliding selections are flagged, not removed; the user has to
    deselect them explicitly.
    """
    errors: Dict[str, str] = {}
    for rule in schema.cross_field_rules:
        if rule.kind != CrossFieldKind.EXCLUSION:
            continue
        primary = values.get(rule.primary_key)
        if primary and primary in selected_values(values.get(rule.dependent_key)):
            errors.setdefault(rule.dependent_key, rule.message)
    return errors


def dependent_keys(schema: RoleSchema, key: str) -> Set[str]:
    """Keys whose validity must be recomputed when `key` changes, including `key` itself."""
    keys = {key}
    for rule in schema.rules_for(key):
        keys.add(rule.primary_key)
        keys.add(rule.dependent_key)
    return keys
