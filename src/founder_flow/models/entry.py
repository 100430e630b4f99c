"""
Entry Models - Typed views over scraped founder listings

RawEntry wraps the heterogeneous records stored by the scrapers. Field names
vary by scrape source, so every known alias is modelled as an optional string
and unknown keys are kept as extras. Placeholder values ("N/A", "-", "tbd")
are normalized to None on the way in.

ClassifiedLinks is the output of the link classifier: at most one URL per
link slot plus the best email address.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from founder_flow.utils.na_values import normalize_optional_string
from founder_flow.utils.url_normalizer import (
    HTTP_SCHEME_RE,
    as_http_url,
    clean_email,
    pretty_domain,
)

SCALAR_TYPES = (str, int, float)


class RawEntry(BaseModel):
    """
    Scraped founder/company record as stored in the document database

    No field is guaranteed to be present or well-formed.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    # Company website aliases
    company_url: str | None = None
    companyUrl: str | None = None
    website: str | None = None
    site: str | None = None
    homepage: str | None = None
    url_website: str | None = None

    # LinkedIn aliases
    linkedinurl: str | None = None
    linkedin_url: str | None = None
    linkedin: str | None = None
    li: str | None = None

    # Careers/roles aliases (legacy data stores an email in `url`)
    url: str | None = None
    roles_url: str | None = None
    careers: str | None = None
    jobs_url: str | None = None
    open_roles_url: str | None = None

    apply_url: str | None = None
    email: str | None = None

    # Descriptive fields
    company: str | None = None
    name: str | None = None
    role: str | None = None
    company_info: str | None = None
    looking_for: str | None = None
    published: Any = None

    @field_validator("*", mode="before")
    @classmethod
    def normalize_placeholders(cls, v: Any, info: ValidationInfo) -> Any:
        """Turn NA-like scalars into None and everything else into trimmed strings"""
        if info.field_name == "published":
            return v
        if isinstance(v, bool) or not isinstance(v, SCALAR_TYPES):
            return None
        return normalize_optional_string(v)

    @classmethod
    def from_record(cls, record: "dict[str, Any] | RawEntry") -> "RawEntry":
        """Build an entry from a document-store record"""
        if isinstance(record, RawEntry):
            return record
        return cls.model_validate(dict(record or {}))


class FlexUrlField(BaseModel):
    """
    Decoded legacy `url` field

    Depending on the scrape source, `url` holds either a careers URL or an
    email address.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["url", "email", "unknown"]
    value: str | None = None


def decode_flex_url(raw: Any) -> FlexUrlField:
    """
    Decode the legacy `url` field into a URL, an email, or unknown

    A value with an http(s) scheme is always a URL, even when its query
    string holds an address ("https://acme.com/jobs?contact=hr@acme.com").

    Args:
        raw: Raw value of the `url` field

    Returns:
        FlexUrlField with the cleaned value
    """
    text = normalize_optional_string(raw)
    if text is None:
        return FlexUrlField(kind="unknown")

    if not HTTP_SCHEME_RE.match(text):
        email = clean_email(text)
        if email:
            return FlexUrlField(kind="email", value=email)

    url = as_http_url(text)
    if url:
        return FlexUrlField(kind="url", value=url)

    return FlexUrlField(kind="unknown")


class ClassifiedLinks(BaseModel):
    """Links chosen for one entry; no canonical URL appears in two slots"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    linkedin_url: str | None = Field(default=None, alias="linkedinUrl")
    apply_url: str | None = None
    roles_url: str | None = Field(default=None, alias="rolesUrl")
    company_url: str | None = Field(default=None, alias="companyUrl")
    email_href: str | None = Field(default=None, alias="emailHref")
    email: str | None = None

    @property
    def has_email(self) -> bool:
        return bool(self.email)

    @property
    def has_linkedin(self) -> bool:
        return bool(self.linkedin_url)

    @property
    def has_company_url(self) -> bool:
        return bool(self.company_url)

    @property
    def has_apply_url(self) -> bool:
        return bool(self.apply_url)

    @property
    def company_domain(self) -> str | None:
        """Display domain of the company website (e.g. "acme.com")"""
        return pretty_domain(self.company_url)

    @property
    def urls(self) -> list[str]:
        """All assigned slot URLs"""
        return [
            url
            for url in (self.linkedin_url, self.apply_url, self.roles_url, self.company_url)
            if url
        ]

    def to_dict(self) -> dict[str, Any]:
        """Convert to the camelCase shape consumed by the web frontend"""
        data = self.model_dump(by_alias=True)
        data.update(
            {
                "companyDomain": self.company_domain,
                "hasEmail": self.has_email,
                "hasLinkedIn": self.has_linkedin,
                "hasCompanyUrl": self.has_company_url,
                "hasApplyUrl": self.has_apply_url,
            }
        )
        return data


class ValidationResult(BaseModel):
    """Detailed verdict from the actionable-URL validator"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    is_valid: bool = Field(alias="isValid")
    reason: str | None = None
    original_url: str = Field(alias="originalUrl")

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
