"""Tests for per-field rules, cross-field rules and full-form validation."""

import pytest

from contracts import LengthClass, Role
from registry import get_schema, default_values
from validation import (
    classify_length,
    exclusion_errors,
    dependent_keys,
    length_feedback,
    selectable_options,
    validate_field,
    validate_form,
    validate_keys,
)


EXPERT = get_schema(Role.EXPERT)
COMPANY = get_schema(Role.COMPANY)


class TestTextRules:
    """Required text, minimum lengths and patterns."""

    def test_required_message(self):
        assert validate_field(EXPERT.field("first_name"), "") == "First name is required"

    def test_min_length(self):
        assert validate_field(EXPERT.field("first_name"), "A") == "Must be at least 2 characters"
        assert validate_field(EXPERT.field("first_name"), "Al") is None

    def test_optional_text_accepts_empty(self):
        assert validate_field(EXPERT.field("certifications"), "") is None

    def test_phone_pattern(self):
        phone = EXPERT.field("phone")
        assert validate_field(phone, "+234 (0) 803-123-4567") is None
        assert validate_field(phone, "0803 CALL ME") == "Invalid phone number"

    def test_phone_min_length(self):
        assert validate_field(EXPERT.field("phone"), "12345") == "Phone number must be at least 10 characters"
        assert validate_field(EXPERT.field("phone"), "0803123456") is None

    def test_phone_rejects_trailing_newline(self):
        assert validate_field(EXPERT.field("phone"), "+234 803 123 456\n") == "Invalid phone number"


class TestEmailAndUrlRules:
    """Email grammar, URL parsing and URL domain checks."""

    def test_email(self):
        email = EXPERT.field("email")
        assert validate_field(email, "ada.obi@gaesee.com") is None
        assert validate_field(email, "ada.obi@") == "Invalid email address"
        assert validate_field(email, "") == "Email is required"

    def test_email_rejects_display_name_form(self):
        assert validate_field(EXPERT.field("email"), "Ada Obi <ada@gaesee.com>") == "Invalid email address"

    def test_linkedin_requires_url(self):
        assert validate_field(EXPERT.field("linkedin"), "linkedin profile") == "Must be a valid URL"

    def test_linkedin_requires_domain(self):
        linkedin = EXPERT.field("linkedin")
        assert validate_field(linkedin, "https://github.com/ada") == "Must be a LinkedIn URL"
        assert validate_field(linkedin, "https://ng.linkedin.com/in/ada") is None

    def test_empty_linkedin_rejected(self):
        assert validate_field(EXPERT.field("linkedin"), "") == "Must be a LinkedIn URL"

    def test_company_website(self):
        website = COMPANY.field("company_website")
        assert validate_field(website, "https://voltapetroleum.com") is None
        assert validate_field(website, "voltapetroleum") == "Must be a valid URL"


class TestChoiceRules:
    """Enum, multi-enum, number and boolean fields."""

    def test_enum_membership(self):
        level = EXPERT.field("expert_level")
        assert validate_field(level, "practitioner") is None
        assert validate_field(level, "guru") == "Please select an expert level"
        assert validate_field(level, "") == "Expert level is required"

    def test_multi_enum_needs_one_selection(self):
        services = EXPERT.field("services_offered")
        assert validate_field(services, []) == "Select at least one service"
        assert validate_field(services, ["Risk Assessment"]) is None

    def test_multi_enum_rejects_unknown_member(self):
        assert validate_field(EXPERT.field("services_offered"), ["Catering"]) == "Unknown service selected"

    def test_years_experience(self):
        years = EXPERT.field("years_experience")
        assert validate_field(years, "15") is None
        assert validate_field(years, 0) is None
        assert validate_field(years, "") == "Years of experience is required"
        assert validate_field(years, "fifteen") == "Must be a whole number"
        assert validate_field(years, "2.5") == "Must be a whole number"
        assert validate_field(years, "-1") == "Must be 0 or more"

    def test_consent_must_be_true(self):
        consent = EXPERT.field("agree_terms")
        assert validate_field(consent, True) is None
        assert validate_field(consent, False) == "You must accept the terms and conditions"
        assert validate_field(consent, "yes") == "You must accept the terms and conditions"


class TestLengthFeedback:
    """Three-way classification of the summary length."""

    @pytest.mark.parametrize(
        "length,expected",
        [
            (99, LengthClass.TOO_SHORT),
            (100, LengthClass.OK),
            (1000, LengthClass.OK),
            (1001, LengthClass.TOO_LONG),
        ],
    )
    def test_summary_boundaries(self, length, expected):
        feedback = length_feedback(EXPERT.field("summary"), "x" * length)
        assert feedback.classification == expected
        assert feedback.counter_text == f"{length}/1000"

    def test_summary_errors_match_classification(self):
        summary = EXPERT.field("summary")
        assert validate_field(summary, "x" * 99) == "Summary must be at least 100 characters"
        assert validate_field(summary, "x" * 1001) == "Summary must not exceed 1000 characters"
        assert validate_field(summary, "x" * 1000) is None

    def test_classify_length_direct(self):
        assert classify_length(0, 100, 1000) == LengthClass.TOO_SHORT

    def test_non_text_value_counts_as_empty(self):
        assert length_feedback(EXPERT.field("summary"), None).length == 0


class TestCrossFieldRules:
    """Primary/secondary specialization exclusion."""

    def test_primary_removed_from_secondary_options(self):
        values = default_values(EXPERT)
        values["primary_specialization"] = "Drilling Operations"
        options = [o.value for o in selectable_options(EXPERT, values, "secondary_specializations")]
        assert "Drilling Operations" not in options
        assert len(options) == 19

    def test_no_primary_offers_everything(self):
        values = default_values(EXPERT)
        assert len(selectable_options(EXPERT, values, "secondary_specializations")) == 20

    def test_collision_is_flagged_not_removed(self):
        values = default_values(EXPERT)
        values["secondary_specializations"] = ["Geosciences", "Procurement"]
        values["primary_specialization"] = "Geosciences"
        errors = exclusion_errors(EXPERT, values)
        assert errors == {
            "secondary_specializations": "Secondary specializations cannot include your primary specialization"
        }
        assert values["secondary_specializations"] == ["Geosciences", "Procurement"]

    def test_dependent_keys(self):
        assert dependent_keys(EXPERT, "primary_specialization") == {
            "primary_specialization",
            "secondary_specializations",
        }
        assert dependent_keys(EXPERT, "city") == {"city"}


class TestValidateForm:
    """validate_form is a pure function of values and schema."""

    @pytest.mark.parametrize("role", list(Role))
    def test_defaults_are_invalid(self, role):
        schema = get_schema(role)
        result = validate_form(default_values(schema), schema)
        assert not result.is_valid
        assert "email" in result.errors
        assert "agree_terms" in result.errors

    def test_valid_expert(self, expert_values):
        assert validate_form(expert_values, EXPERT).is_valid

    def test_valid_company(self, company_values):
        assert validate_form(company_values, COMPANY).is_valid

    def test_errors_follow_declaration_order(self):
        result = validate_form(default_values(EXPERT), EXPERT)
        assert list(result.errors) == [k for k in EXPERT.keys() if k in result.errors]

    def test_cross_field_error_reported(self, expert_values):
        expert_values["secondary_specializations"] = ["Drilling Operations"]
        result = validate_form(expert_values, EXPERT)
        assert list(result.errors) == ["secondary_specializations"]

    def test_field_error_wins_over_cross_field_error(self, expert_values):
        expert_values["secondary_specializations"] = ["Drilling Operations", "Catering"]
        result = validate_form(expert_values, EXPERT)
        assert result.errors["secondary_specializations"] == "Unknown specialization selected"

    def test_validate_keys_subset(self):
        errors = validate_keys(default_values(EXPERT), EXPERT, ["city", "email"])
        assert set(errors) == {"city", "email"}

    def test_does_not_mutate_values(self, expert_values):
        before = dict(expert_values)
        validate_form(expert_values, EXPERT)
        assert expert_values == before
