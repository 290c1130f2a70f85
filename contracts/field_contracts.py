"""Field and schema contracts for the registration form.

A RoleSchema is the declarative description of one applicant form:
an ordered list of FieldDefinitions plus the cross-field rules that
span more than one of them.
"""

from pydantic import BaseModel, Field, model_validator
from typing import Any, Dict, List, Optional
from enum import Enum

from .errors import InvalidRoleError


class Role(str, Enum):
    """Applicant category selecting which schema applies."""
    EXPERT = "expert"
    COMPANY = "company"


def parse_role(role: Any) -> Role:
    """Coerce a role identifier to Role, raising InvalidRoleError if unknown."""
    if isinstance(role, Role):
        return role
    try:
        return Role(role)
    except ValueError:
        raise InvalidRoleError(role) from None


class FieldKind(str, Enum):
    """Value type of a form field."""
    TEXT = "text"
    NUMBER = "number"
    EMAIL = "email"
    URL = "url"
    ENUM = "enum"
    MULTI_ENUM = "multi_enum"
    BOOLEAN = "boolean"


class FieldConstraints(BaseModel):
    """Kind-specific constraints. Unused entries stay None."""
    min_length: Optional[int] = Field(None, ge=0, description="Minimum character count")
    max_length: Optional[int] = Field(None, ge=1, description="Maximum character count")
    pattern: Optional[str] = Field(None, description="Regex the whole value must match")
    allowed_values: Optional[List[str]] = Field(None, description="Members for enum/multi-enum fields")
    url_domain: Optional[str] = Field(None, description="Substring the URL must contain, e.g. linkedin.com")
    min_items: Optional[int] = Field(None, ge=0, description="Minimum selections for multi-enum fields")
    min_value: Optional[float] = Field(None, description="Lower bound for number fields")
    whole_number: bool = Field(default=False, description="Number fields must be integers")

    @model_validator(mode='after')
    def validate_length_bounds(self) -> 'FieldConstraints':
        """min_length may not exceed max_length."""
        if self.min_length is not None and self.max_length is not None:
            if self.min_length > self.max_length:
                raise ValueError("min_length must not exceed max_length")
        return self


class FieldOption(BaseModel):
    """One selectable value of an enum or multi-enum field."""
    value: str
    label: str
    description: Optional[str] = None


class FieldDefinition(BaseModel):
    """Declarative description of one form field."""
    key: str = Field(..., min_length=1, description="Unique key within the schema")
    kind: FieldKind
    label: str
    required: bool = False
    constraints: FieldConstraints = Field(default_factory=FieldConstraints)
    messages: Dict[str, str] = Field(
        default_factory=dict,
        description="Error text per rule: required, min_length, max_length, pattern, email, url, url_domain, one_of, min_items, number, min_value"
    )
    placeholder: Optional[str] = None
    options: List[FieldOption] = Field(default_factory=list)
    show_counter: bool = Field(default=False, description="Render a live length counter for this field")

    @model_validator(mode='before')
    @classmethod
    def derive_allowed_values(cls, data: Any) -> Any:
        """Fill constraints.allowed_values from options when only options are given."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        options = data.get('options') or []
        if not options:
            return data
        constraints = data.get('constraints')
        if isinstance(constraints, FieldConstraints):
            constraints = constraints.model_dump()
        constraints = dict(constraints or {})
        if not constraints.get('allowed_values'):
            constraints['allowed_values'] = [
                o.value if isinstance(o, FieldOption) else o['value'] for o in options
            ]
        data['constraints'] = constraints
        return data

    def default_value(self) -> Any:
        """Value a freshly initialised form holds for this field."""
        if self.kind == FieldKind.MULTI_ENUM:
            return []
        if self.kind == FieldKind.BOOLEAN:
            return False
        return ""

    def message(self, rule: str, fallback: str) -> str:
        """Error text for a rule, falling back to a generic message."""
        return self.messages.get(rule, fallback)


class CrossFieldKind(str, Enum):
    """Kinds of rules spanning two fields."""
    EXCLUSION = "exclusion"


class CrossFieldRule(BaseModel):
    """A rule whose outcome depends on more than one field.

    For EXCLUSION rules the dependent multi-enum field may not contain the
    value currently selected in the primary field. Errors are attributed
    to the dependent field.
    """
    kind: CrossFieldKind = CrossFieldKind.EXCLUSION
    primary_key: str
    dependent_key: str
    message: str


class RoleSchema(BaseModel):
    """Ordered fields plus cross-field rules for one role."""
    role: Role
    title: str
    fields: List[FieldDefinition] = Field(..., min_length=1)
    cross_field_rules: List[CrossFieldRule] = Field(default_factory=list)

    @model_validator(mode='after')
    def validate_keys(self) -> 'RoleSchema':
        """Field keys are unique and every cross-field rule references declared fields."""
        seen = set()
        for f in self.fields:
            if f.key in seen:
                raise ValueError(f"Duplicate field key in {self.role.value} schema: {f.key}")
            seen.add(f.key)
        for rule in self.cross_field_rules:
            for key in (rule.primary_key, rule.dependent_key):
                if key not in seen:
                    raise ValueError(f"Cross-field rule references unknown field: {key}")
        return self

    def keys(self) -> List[str]:
        """Field keys in declaration order."""
        return [f.key for f in self.fields]

    def has_field(self, key: str) -> bool:
        return any(f.key == key for f in self.fields)

    def field(self, key: str) -> FieldDefinition:
        """Look up a field by key; KeyError if absent."""
        for f in self.fields:
            if f.key == key:
                return f
        raise KeyError(key)

    def rules_for(self, key: str) -> List[CrossFieldRule]:
        """Cross-field rules in which the key takes part, either side."""
        return [r for r in self.cross_field_rules if key in (r.primary_key, r.dependent_key)]
