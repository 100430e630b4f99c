"""
Link Classifier - Assign scraped URLs to semantic link slots

Each founder listing carries up to four useful links, but scrape sources put
them in inconsistently named fields and often repeat the same URL in several
of them. The classifier resolves one candidate URL per field family and then
fills four slots, in order:

    1. linkedin_url - a linkedin.com URL
    2. apply_url    - the explicit apply_url field only
    3. roles_url    - a job board or careers page
    4. company_url  - a plain company website

Assignment is greedy first-fit: within each slot the candidates are tried in a
fixed priority order, and a canonical URL already used by an earlier slot is
skipped. Explicit fields (e.g. `linkedinurl`) therefore win over generic
fallbacks (e.g. a `company_url` that happens to point at LinkedIn).

Examples:
    >>> links = choose_links({"linkedinurl": "linkedin.com/company/acme", "url": "acme.com/careers"})
    >>> links.linkedin_url, links.roles_url
    ('https://linkedin.com/company/acme', 'https://acme.com/careers')
"""

import logging
import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from founder_flow.models.entry import ClassifiedLinks, RawEntry, decode_flex_url
from founder_flow.utils.url_normalizer import (
    as_http_url,
    canonicalize_url,
    clean_email,
    mailto_href,
    parse_http_url,
)

logger = logging.getLogger(__name__)

# Field aliases per candidate family, in priority order
CANDIDATE_ALIASES: dict[str, tuple[str, ...]] = {
    "company": ("company_url", "companyUrl", "website", "site", "homepage", "url_website"),
    "linkedin": ("linkedinurl", "linkedin_url", "linkedin", "li"),
    "flex": ("url", "roles_url", "careers", "jobs_url", "open_roles_url"),
    "apply": ("apply_url",),
}

LINKEDIN_HOST_RE = re.compile(r"(^|\.)linkedin\.com$", re.IGNORECASE)

JOB_BOARD_HOSTS = (
    "greenhouse.io",
    "lever.co",
    "workable.com",
    "ashbyhq.com",
    "myworkdayjobs.com",
    "jobvite.com",
    "bamboohr.com",
)

# Known to misfire on unrelated paths that merely contain these words
JOB_BOARD_PATH_RE = re.compile(r"careers|jobs|open-roles|apply|join-us", re.IGNORECASE)

BAD_COMPANY_HOSTS = frozenset({"gmail.com", "mail.google.com"})

# Fields searched by filter_actionable_entries()
SEARCHABLE_FIELDS = ("name", "company", "role", "company_info", "looking_for")


def is_linkedin_url(url: str | None) -> bool:
    """Check whether a URL points at linkedin.com or one of its subdomains"""
    parsed = parse_http_url(url)
    if parsed is None:
        return False
    return bool(LINKEDIN_HOST_RE.search(parsed.hostname))


def is_job_board_url(url: str | None) -> bool:
    """
    Check whether a URL looks like a job board or careers page

    Args:
        url: Absolute URL

    Returns:
        True for known ATS hosts (Greenhouse, Lever, ...) or careers-like paths
    """
    parsed = parse_http_url(url)
    if parsed is None:
        return False

    if any(host in parsed.hostname for host in JOB_BOARD_HOSTS):
        return True
    return bool(JOB_BOARD_PATH_RE.search(parsed.path))


def is_bad_company_domain(url: str | None) -> bool:
    """Check for webmail hosts that are never a company website"""
    parsed = parse_http_url(url)
    if parsed is None:
        return False
    return parsed.hostname in BAD_COMPANY_HOSTS


def is_company_site(url: str | None) -> bool:
    return not (is_linkedin_url(url) or is_job_board_url(url) or is_bad_company_domain(url))


def _always(_url: str | None) -> bool:
    return True


@dataclass(frozen=True)
class SlotRule:
    """
    One link slot: which candidate families it accepts and in what order

    Attributes:
        slot: ClassifiedLinks field name to fill
        candidates: Candidate families tried in priority order
        predicate: Eligibility check applied to each candidate URL
    """

    slot: str
    candidates: tuple[str, ...]
    predicate: Callable[[str | None], bool]


DEFAULT_SLOT_RULES: tuple[SlotRule, ...] = (
    SlotRule("linkedin_url", ("linkedin", "company", "flex", "apply"), is_linkedin_url),
    SlotRule("apply_url", ("apply",), _always),
    SlotRule("roles_url", ("flex", "company"), is_job_board_url),
    SlotRule("company_url", ("company", "flex"), is_company_site),
)


class LinkClassifier:
    """
    Greedy first-fit link slot assignment

    Slot rules are processed in order against a shared set of used canonical
    URLs, so no canonical URL ends up in two slots.
    """

    def __init__(self, rules: Iterable[SlotRule] = DEFAULT_SLOT_RULES):
        self.rules = tuple(rules)

    def resolve_candidates(self, entry: RawEntry) -> dict[str, str | None]:
        """
        Resolve one absolute URL per candidate family

        The first alias that normalizes to a URL wins. A `url` field holding a
        bare email address (no http(s) scheme) is not a URL candidate.

        Args:
            entry: Normalized raw entry

        Returns:
            Mapping of family name ("company", "linkedin", "flex", "apply") to URL
        """
        flex = decode_flex_url(entry.url)
        candidates: dict[str, str | None] = {}

        for family, aliases in CANDIDATE_ALIASES.items():
            candidates[family] = None
            for alias in aliases:
                if alias == "url" and flex.kind == "email":
                    continue
                url = as_http_url(getattr(entry, alias, None))
                if url:
                    candidates[family] = url
                    break

        return candidates

    def classify(self, entry: "RawEntry | Mapping[str, Any]") -> ClassifiedLinks:
        """
        Choose links for one entry

        Args:
            entry: RawEntry or raw document-store record

        Returns:
            ClassifiedLinks with at most one URL per slot
        """
        if not isinstance(entry, RawEntry):
            entry = RawEntry.from_record(dict(entry or {}))

        candidates = self.resolve_candidates(entry)
        used: set[str] = set()
        slots: dict[str, str] = {}

        for rule in self.rules:
            for family in rule.candidates:
                candidate = candidates.get(family)
                if not candidate or not rule.predicate(candidate):
                    continue
                canonical = canonicalize_url(candidate)
                if canonical is None or canonical in used:
                    continue
                slots[rule.slot] = candidate
                used.add(canonical)
                break

        flex = decode_flex_url(entry.url)
        flex_email = flex.value if flex.kind == "email" else None
        email = clean_email(entry.email) or flex_email

        links = ClassifiedLinks(email=email, email_href=mailto_href(email), **slots)
        logger.debug(f"Classified links for {entry.company or entry.name or 'entry'}: {slots}")
        return links


_default_classifier = LinkClassifier()


def choose_links(entry: "RawEntry | Mapping[str, Any]") -> ClassifiedLinks:
    """Choose links for one entry using the default slot rules"""
    return _default_classifier.classify(entry)


def has_actionable_links(entry: "RawEntry | Mapping[str, Any]") -> bool:
    """True when an entry has a company, apply or LinkedIn URL, or an email"""
    links = choose_links(entry)
    return links.has_company_url or links.has_apply_url or links.has_linkedin or links.has_email


def filter_actionable_entries(
    entries: Iterable["RawEntry | Mapping[str, Any]"], search_query: str = ""
) -> list[RawEntry]:
    """
    Filter entries for listing views

    Without a search query only entries with at least one actionable link are
    kept. With a query, entries are matched case-insensitively against the
    name, company, role, company info and looking-for fields.

    Args:
        entries: Raw entries or document-store records
        search_query: Free-text search

    Returns:
        Matching entries as RawEntry objects, in input order
    """
    query = (search_query or "").strip().lower()
    normalized = [RawEntry.from_record(entry) for entry in entries]

    if not query:
        kept = [entry for entry in normalized if has_actionable_links(entry)]
        logger.info(f"Kept {len(kept)}/{len(normalized)} entries with actionable links")
        return kept

    return [
        entry
        for entry in normalized
        if any(query in (getattr(entry, field) or "").lower() for field in SEARCHABLE_FIELDS)
    ]
