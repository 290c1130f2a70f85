"""FieldSchema Registry - per-role field definitions.

Two roles share one registry:
- expert: individual professionals applying to join the network
- company: organisations registering to engage experts

Fields shared by both roles (contact details, consent) are built by the
same helpers so their rules cannot drift apart.
"""

from typing import Any, Dict, List, Optional

from contracts import (
    Role,
    parse_role,
    FieldKind,
    FieldConstraints,
    FieldDefinition,
    CrossFieldRule,
    RoleSchema,
)
from registry.catalogs import (
    COUNTRIES,
    SPECIALIZATIONS,
    SERVICES,
    EXPERT_LEVELS,
    INDUSTRY_SECTORS,
    as_options,
)
from config import settings


PHONE_PATTERN = r"^[0-9+\-\s()]+$"
SECONDARY_EXCLUSION_MESSAGE = "Secondary specializations cannot include your primary specialization"


# ============================================================================
# SHARED FIELD BUILDERS
# ============================================================================

def _name_field(key: str, label: str, placeholder: str) -> FieldDefinition:
    return FieldDefinition(
        key=key,
        kind=FieldKind.TEXT,
        label=label,
        required=True,
        constraints=FieldConstraints(min_length=2),
        messages={
            "required": f"{label} is required",
            "min_length": "Must be at least 2 characters",
        },
        placeholder=placeholder,
    )


def _required_text(key: str, label: str, message: str, placeholder: Optional[str] = None) -> FieldDefinition:
    return FieldDefinition(
        key=key,
        kind=FieldKind.TEXT,
        label=label,
        required=True,
        messages={"required": message},
        placeholder=placeholder,
    )


def _email_field() -> FieldDefinition:
    return FieldDefinition(
        key="email",
        kind=FieldKind.EMAIL,
        label="Email Address",
        required=True,
        messages={
            "required": "Email is required",
            "email": "Invalid email address",
        },
        placeholder="john.doe@example.com",
    )


def _phone_field() -> FieldDefinition:
    return FieldDefinition(
        key="phone",
        kind=FieldKind.TEXT,
        label="Phone Number",
        required=True,
        constraints=FieldConstraints(
            pattern=PHONE_PATTERN,
            min_length=settings.phone_min_length,
        ),
        messages={
            "required": "Phone number is required",
            "pattern": "Invalid phone number",
            "min_length": f"Phone number must be at least {settings.phone_min_length} characters",
        },
        placeholder="+234 800 000 0000",
    )


def _country_field() -> FieldDefinition:
    return FieldDefinition(
        key="country",
        kind=FieldKind.ENUM,
        label="Country",
        required=True,
        options=as_options(COUNTRIES),
        messages={
            "required": "Country is required",
            "one_of": "Please select a country",
        },
    )


def _long_text_field(key: str, label: str, noun: str, placeholder: str) -> FieldDefinition:
    return FieldDefinition(
        key=key,
        kind=FieldKind.TEXT,
        label=label,
        required=True,
        constraints=FieldConstraints(
            min_length=settings.summary_min_length,
            max_length=settings.summary_max_length,
        ),
        messages={
            "required": f"{label} is required",
            "min_length": f"{noun} must be at least {settings.summary_min_length} characters",
            "max_length": f"{noun} must not exceed {settings.summary_max_length} characters",
        },
        placeholder=placeholder,
        show_counter=True,
    )


def _services_field(key: str, label: str) -> FieldDefinition:
    return FieldDefinition(
        key=key,
        kind=FieldKind.MULTI_ENUM,
        label=label,
        required=True,
        constraints=FieldConstraints(min_items=1),
        options=as_options(SERVICES),
        messages={
            "min_items": "Select at least one service",
            "one_of": "Unknown service selected",
        },
    )


def _agree_terms_field() -> FieldDefinition:
    return FieldDefinition(
        key="agree_terms",
        kind=FieldKind.BOOLEAN,
        label="I agree to the Terms and Conditions and Privacy Policy",
        required=True,
        messages={"required": "You must accept the terms and conditions"},
    )


# ============================================================================
# ROLE SCHEMAS
# ============================================================================

def _build_expert_schema() -> RoleSchema:
    return RoleSchema(
        role=Role.EXPERT,
        title="Expert Registration",
        fields=[
            # Personal information
            _name_field("first_name", "First name", "John"),
            _name_field("last_name", "Last name", "Doe"),
            _email_field(),
            _phone_field(),
            _country_field(),
            _required_text("city", "City", "City is required", "Lagos"),
            # Professional background
            FieldDefinition(
                key="expert_level",
                kind=FieldKind.ENUM,
                label="Expert Level",
                required=True,
                options=EXPERT_LEVELS,
                messages={
                    "required": "Expert level is required",
                    "one_of": "Please select an expert level",
                },
            ),
            FieldDefinition(
                key="years_experience",
                kind=FieldKind.NUMBER,
                label="Years of Experience",
                required=True,
                constraints=FieldConstraints(min_value=0, whole_number=True),
                messages={
                    "required": "Years of experience is required",
                    "number": "Must be a whole number",
                    "min_value": "Must be 0 or more",
                },
                placeholder="15",
            ),
            _required_text("current_role", "Current Role", "Current role is required", "Senior Drilling Engineer"),
            _required_text("current_company", "Current/Last Company", "Current/Last company is required", "Shell Nigeria"),
            # Specializations
            FieldDefinition(
                key="primary_specialization",
                kind=FieldKind.ENUM,
                label="Primary Specialization",
                required=True,
                options=as_options(SPECIALIZATIONS),
                messages={
                    "required": "Primary specialization is required",
                    "one_of": "Please select a specialization",
                },
            ),
            FieldDefinition(
                key="secondary_specializations",
                kind=FieldKind.MULTI_ENUM,
                label="Secondary Specializations",
                required=True,
                constraints=FieldConstraints(min_items=1),
                options=as_options(SPECIALIZATIONS),
                messages={
                    "min_items": "Select at least one secondary specialization",
                    "one_of": "Unknown specialization selected",
                },
            ),
            _services_field("services_offered", "Services You Can Provide"),
            # Profile
            FieldDefinition(
                key="linkedin",
                kind=FieldKind.URL,
                label="LinkedIn Profile",
                required=True,
                constraints=FieldConstraints(url_domain="linkedin.com"),
                messages={
                    "required": "Must be a LinkedIn URL",
                    "url": "Must be a valid URL",
                    "url_domain": "Must be a LinkedIn URL",
                },
                placeholder="https://linkedin.com/in/johndoe",
            ),
            _long_text_field(
                "summary",
                "Professional summary",
                "Summary",
                "Describe your experience, key achievements, and areas of expertise...",
            ),
            FieldDefinition(
                key="certifications",
                kind=FieldKind.TEXT,
                label="Professional Certifications",
                placeholder="List your relevant certifications (e.g., PMP, CEng, HSE Certifications, etc.)",
            ),
            _agree_terms_field(),
        ],
        cross_field_rules=[
            CrossFieldRule(
                primary_key="primary_specialization",
                dependent_key="secondary_specializations",
                message=SECONDARY_EXCLUSION_MESSAGE,
            ),
        ],
    )


def _build_company_schema() -> RoleSchema:
    return RoleSchema(
        role=Role.COMPANY,
        title="Company Registration",
        fields=[
            _name_field("company_name", "Company name", "Acme Energy Ltd"),
            _name_field("contact_name", "Contact name", "Jane Doe"),
            _required_text("contact_role", "Contact Role", "Contact role is required", "Head of Procurement"),
            _email_field(),
            _phone_field(),
            _country_field(),
            _required_text("city", "City", "City is required", "Accra"),
            FieldDefinition(
                key="company_website",
                kind=FieldKind.URL,
                label="Company Website",
                required=True,
                messages={
                    "required": "Company website is required",
                    "url": "Must be a valid URL",
                },
                placeholder="https://example.com",
            ),
            FieldDefinition(
                key="industry_sector",
                kind=FieldKind.ENUM,
                label="Industry Sector",
                required=True,
                options=as_options(INDUSTRY_SECTORS),
                messages={
                    "required": "Industry sector is required",
                    "one_of": "Please select an industry sector",
                },
            ),
            _services_field("services_required", "Services Required"),
            _long_text_field(
                "description",
                "Project description",
                "Description",
                "Describe your organisation and the expertise you are looking for...",
            ),
            _agree_terms_field(),
        ],
    )


# Registry of available role schemas
SCHEMAS: Dict[Role, RoleSchema] = {
    Role.EXPERT: _build_expert_schema(),
    Role.COMPANY: _build_company_schema(),
}


def get_schema(role: Any) -> RoleSchema:
    """Get the schema for a role.

    Args:
        role: Role or its string identifier ("expert", "company")

    Returns:
        RoleSchema for the role

    Raises:
        InvalidRoleError: if the role is not known
    """
    return SCHEMAS[parse_role(role)]


def list_roles() -> List[Role]:
    """All roles in registry order."""
    return list(SCHEMAS.keys())


def default_values(schema: RoleSchema) -> Dict[str, Any]:
    """Fresh values mapping holding every key of the schema."""
    return {f.key: f.default_value() for f in schema.fields}
