"""
Unit tests for the entry models.

Tests:
- RawEntry placeholder normalization at ingestion
- FlexUrlField decoding of the legacy `url` field
- ClassifiedLinks derived flags and camelCase serialization
"""

import pytest
from pydantic import ValidationError

from founder_flow.models import ClassifiedLinks, RawEntry, ValidationResult, decode_flex_url


class TestRawEntry:
    """Test RawEntry ingestion"""

    def test_placeholders_become_none(self):
        entry = RawEntry.from_record({"company": "N/A", "email": " none ", "url": "-", "website": ""})

        assert entry.company is None
        assert entry.email is None
        assert entry.url is None
        assert entry.website is None

    def test_values_are_trimmed(self):
        entry = RawEntry.from_record({"company": "  Acme Inc ", "linkedinurl": "linkedin.com/in/jane "})

        assert entry.company == "Acme Inc"
        assert entry.linkedinurl == "linkedin.com/in/jane"

    def test_non_scalars_dropped(self):
        entry = RawEntry.from_record({"url": {"href": "acme.com"}, "email": ["a@b.co"], "role": True})

        assert entry.url is None
        assert entry.email is None
        assert entry.role is None

    def test_numbers_stringified(self):
        assert RawEntry.from_record({"company": 3}).company == "3"

    def test_published_kept_as_is(self):
        stamp = {"seconds": 1700000000, "nanoseconds": 0}
        assert RawEntry.from_record({"published": stamp}).published == stamp

    def test_unknown_fields_kept(self):
        entry = RawEntry.from_record({"company": "Acme", "funding_stage": "Seed"})
        assert entry.model_extra == {"funding_stage": "Seed"}

    def test_from_record_passthrough(self):
        entry = RawEntry(company="Acme")
        assert RawEntry.from_record(entry) is entry

    def test_empty_record(self):
        entry = RawEntry.from_record({})
        assert entry.company is None

    def test_frozen(self):
        entry = RawEntry(company="Acme")
        with pytest.raises(ValidationError):
            entry.company = "Other"


class TestDecodeFlexUrl:
    """Test decoding of the legacy url field"""

    def test_email(self):
        flex = decode_flex_url("mailto:founder@acme.com")
        assert flex.kind == "email"
        assert flex.value == "founder@acme.com"

    def test_url(self):
        flex = decode_flex_url("acme.com/careers")
        assert flex.kind == "url"
        assert flex.value == "https://acme.com/careers"

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("https://acme.com/careers?contact=hr@acme.com", "https://acme.com/careers?contact=hr@acme.com"),
            ("HTTP://hi@acme.com", "http://hi@acme.com/"),
        ],
    )
    def test_scheme_means_url(self, raw, expected):
        flex = decode_flex_url(raw)
        assert flex.kind == "url"
        assert flex.value == expected

    @pytest.mark.parametrize("raw", [None, "N/A", "coming soon"])
    def test_unknown(self, raw):
        flex = decode_flex_url(raw)
        assert flex.kind == "unknown"
        assert flex.value is None


class TestClassifiedLinks:
    """Test ClassifiedLinks flags and serialization"""

    def test_flags(self):
        links = ClassifiedLinks(company_url="https://www.acme.com/", email="jane@acme.com")

        assert links.has_company_url is True
        assert links.has_email is True
        assert links.has_linkedin is False
        assert links.has_apply_url is False
        assert links.company_domain == "acme.com"

    def test_to_dict_uses_wire_names(self):
        links = ClassifiedLinks(
            linkedin_url="https://linkedin.com/in/jane",
            apply_url="https://jobs.lever.co/acme/1",
            email="jane@acme.com",
            email_href="mailto:jane@acme.com",
        )

        assert links.to_dict() == {
            "linkedinUrl": "https://linkedin.com/in/jane",
            "apply_url": "https://jobs.lever.co/acme/1",
            "rolesUrl": None,
            "companyUrl": None,
            "emailHref": "mailto:jane@acme.com",
            "email": "jane@acme.com",
            "companyDomain": None,
            "hasEmail": True,
            "hasLinkedIn": True,
            "hasCompanyUrl": False,
            "hasApplyUrl": True,
        }

    def test_accepts_wire_names(self):
        links = ClassifiedLinks.model_validate({"companyUrl": "https://acme.com/", "rolesUrl": None})
        assert links.company_url == "https://acme.com/"


class TestValidationResult:
    """Test ValidationResult serialization"""

    def test_to_dict(self):
        result = ValidationResult(is_valid=False, reason="URL parsing failed", original_url="x y")
        assert result.to_dict() == {
            "isValid": False,
            "reason": "URL parsing failed",
            "originalUrl": "x y",
        }
