"""Shared fixtures: complete, valid value sets for both roles."""

import pytest

from contracts import Role
from form import FormStore


SUMMARY = (
    "Drilling engineer with eighteen years across deepwater and land rigs in the Niger Delta, "
    "Angola and the North Sea, leading well planning, rig intake and HSE programmes."
)


@pytest.fixture
def expert_values():
    return {
        "first_name": "Ada",
        "last_name": "Obi",
        "email": "ada.obi@gaesee.com",
        "phone": "+234 803 123 4567",
        "country": "Nigeria",
        "city": "Port Harcourt",
        "expert_level": "global-expert",
        "years_experience": "18",
        "current_role": "Senior Drilling Engineer",
        "current_company": "Deepwater Services Ltd",
        "primary_specialization": "Drilling Operations",
        "secondary_specializations": ["Offshore Operations", "HSE Management"],
        "services_offered": ["Technical Assurance", "Training & Mentoring"],
        "linkedin": "https://www.linkedin.com/in/ada-obi",
        "summary": SUMMARY,
        "certifications": "IWCF Level 4",
        "agree_terms": True,
    }


@pytest.fixture
def company_values():
    return {
        "company_name": "Volta Petroleum",
        "contact_name": "Kwame Mensah",
        "contact_role": "Head of Procurement",
        "email": "kwame@voltapetroleum.com",
        "phone": "+233 24 123 4567",
        "country": "Ghana",
        "city": "Accra",
        "company_website": "https://voltapetroleum.com",
        "industry_sector": "Upstream",
        "services_required": ["Project Assurance"],
        "description": SUMMARY,
        "agree_terms": True,
    }


def fill(store: FormStore, values: dict) -> FormStore:
    for key, value in values.items():
        store.set_field_value(key, value)
    return store


@pytest.fixture
def expert_store(expert_values):
    return fill(FormStore(Role.EXPERT), expert_values)


@pytest.fixture
def company_store(company_values):
    return fill(FormStore(Role.COMPANY), company_values)
