"""Option catalogs offered by the registration forms."""

from typing import List

from contracts import FieldOption


COUNTRIES: List[str] = [
    "Nigeria", "Ghana", "Kenya", "South Africa", "Angola", "Egypt",
    "Algeria", "Libya", "Mozambique", "Tanzania", "Uganda", "Cameroon",
    "Senegal", "Ivory Coast", "Ethiopia", "Other",
]

SPECIALIZATIONS: List[str] = [
    "Drilling Operations",
    "Production Engineering",
    "Reservoir Engineering",
    "Pipeline Engineering",
    "Offshore Operations",
    "Subsea Engineering",
    "Process Engineering",
    "Facilities Management",
    "Project Management",
    "HSE Management",
    "Quality Assurance",
    "Contract Management",
    "Geosciences",
    "Petroleum Engineering",
    "Mechanical Engineering",
    "Electrical Engineering",
    "Instrumentation & Control",
    "Civil & Structural Engineering",
    "Procurement",
    "Regulatory Compliance",
]

SERVICES: List[str] = [
    "Technical Assurance",
    "Project Assurance",
    "Contract Assurance",
    "Value Assurance",
    "Technical Support",
    "Project Management",
    "HSE Management",
    "Quality Control",
    "Training & Mentoring",
    "Regulatory Compliance",
    "Risk Assessment",
    "Feasibility Studies",
]

EXPERT_LEVELS: List[FieldOption] = [
    FieldOption(value="global-expert", label="Global Expert", description="20+ years"),
    FieldOption(value="subject-matter-expert", label="Subject Matter Expert", description="15+ years"),
    FieldOption(value="practitioner", label="Practitioner", description="10+ years"),
]

INDUSTRY_SECTORS: List[str] = [
    "Upstream",
    "Midstream",
    "Downstream",
    "Oilfield Services",
    "Power & Utilities",
    "Renewables",
    "Engineering & Construction",
    "Other",
]


def as_options(values: List[str]) -> List[FieldOption]:
    """Plain catalog entries as options whose label equals their value."""
    return [FieldOption(value=v, label=v) for v in values]
