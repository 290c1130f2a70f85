"""FieldSchema Registry for the expert and company registration forms."""

from .catalogs import COUNTRIES, SPECIALIZATIONS, SERVICES, EXPERT_LEVELS, INDUSTRY_SECTORS
from .schemas import SCHEMAS, get_schema, list_roles, default_values

__all__ = [
    "COUNTRIES",
    "SPECIALIZATIONS",
    "SERVICES",
    "EXPERT_LEVELS",
    "INDUSTRY_SECTORS",
    "SCHEMAS",
    "get_schema",
    "list_roles",
    "default_values",
]
