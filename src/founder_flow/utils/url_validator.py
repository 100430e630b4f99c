"""
Actionable URL Validator - Filter out links that are not worth clicking

A URL can be perfectly well-formed and still useless on a founder card:
webmail inboxes, search engines, social feeds, placeholder domains, job board
redirect pages, or scraping artifacts like "https://hi@acme.com". This module
is a denylist filter: any URL that survives the checks below is valid.

Checks (in order):
- Empty values and placeholder tokens ("n/a", "tbd", "coming soon", ...)
- Pseudo-schemes (javascript:, mailto:, tel:) and strings shorter than 4 chars
- An "@" before the query string (email concatenated into a URL)
- URL parse failure
- Host or host+path containing a blocked pattern (substring match)

The blocked patterns live in a BlockedPatternRegistry that is injected into
UrlValidator. The module-level helpers share one process-wide validator.
"""

import logging
import threading
from collections.abc import Iterable, Mapping
from typing import Any

from founder_flow.models.entry import ValidationResult
from founder_flow.utils.url_normalizer import HTTP_SCHEME_RE, parse_http_url

logger = logging.getLogger(__name__)

DEFAULT_BLOCKED_PATTERNS: tuple[str, ...] = (
    # Email providers
    "gmail.com",
    "yahoo.com",
    "outlook.com",
    "hotmail.com",
    "aol.com",
    "protonmail.com",
    "mail.com",
    "icloud.com",
    # Search engines
    "google.com",
    "bing.com",
    "duckduckgo.com",
    "search.yahoo.com",
    "ask.com",
    "baidu.com",
    # Social media and feeds
    "facebook.com",
    "twitter.com",
    "instagram.com",
    "tiktok.com",
    "linkedin.com/feed",
    "youtube.com",
    "snapchat.com",
    "discord.com",
    # Placeholder domains
    "example.com",
    "localhost",
    "test.com",
    "placeholder.com",
    "127.0.0.1",
    "0.0.0.0",  # nosec B104
    # Job boards that redirect to themselves
    "indeed.com/viewjob",
    "glassdoor.com/job",
    "monster.com",
    "careerbuilder.com",
    # Scraping artifacts
    "javascript:",
    "mailto:",
    "tel:",
    "#",
    "void(0)",
    "null",
    "undefined",
    "about:blank",
    "data:",
    # News and content sites
    "techcrunch.com",
    "bloomberg.com",
    "reuters.com",
    "cnn.com",
    "bbc.com",
    "medium.com",
    "substack.com",
    # Cloud storage
    "dropbox.com",
    "drive.google.com",
    "onedrive.com",
    "icloud.com/share",
    # Dev/placeholder hosting
    "github.io",
    "netlify.app",
    "vercel.app",
    "herokuapp.com",
    "replit.com",
)

PLACEHOLDER_VALUES = frozenset(
    {"", "n/a", "null", "undefined", "none", "tbd", "coming soon", "not available", "na"}
)

PSEUDO_SCHEMES = ("javascript:", "mailto:", "tel:")

MIN_URL_LENGTH = 4


class BlockedPatternRegistry:
    """
    Thread-safe, append-only list of blocked URL substrings

    Patterns are stored lowercased. Readers get a snapshot, so a concurrent
    add() never changes a list that is being iterated.
    """

    def __init__(self, patterns: Iterable[str] = DEFAULT_BLOCKED_PATTERNS):
        self._lock = threading.Lock()
        self._patterns: tuple[str, ...] = ()
        for pattern in patterns:
            self.add(pattern)

    def add(self, pattern: str) -> bool:
        """
        Add a pattern unless it is already present

        Args:
            pattern: Substring to block (case-insensitive)

        Returns:
            True if the pattern was added, False if empty or already present
        """
        normalized = (pattern or "").strip().lower()
        if not normalized:
            return False

        with self._lock:
            if normalized in self._patterns:
                return False
            self._patterns = self._patterns + (normalized,)
        return True

    def list(self) -> list[str]:
        """Copy of the current patterns"""
        return list(self._patterns)

    def snapshot(self) -> tuple[str, ...]:
        return self._patterns

    def __contains__(self, pattern: object) -> bool:
        return isinstance(pattern, str) and pattern.lower() in self._patterns

    def __len__(self) -> int:
        return len(self._patterns)


class UrlValidator:
    """Decide whether a URL is an actionable link"""

    def __init__(self, registry: BlockedPatternRegistry | None = None):
        """
        Args:
            registry: Blocked patterns to use (default: DEFAULT_BLOCKED_PATTERNS)
        """
        self.registry = registry if registry is not None else BlockedPatternRegistry()

    def _rejection_reason(self, url: Any) -> str | None:
        """Run every check in order; return the first failure, or None if valid"""
        if not url:
            return "URL is null or undefined"

        normalized = str(url).strip().lower()

        if normalized in PLACEHOLDER_VALUES:
            return "URL is empty or placeholder value"
        if (
            normalized.startswith(PSEUDO_SCHEMES)
            or normalized == "#"
            or "void(0)" in normalized
            or len(normalized) < MIN_URL_LENGTH
        ):
            return "URL is obviously invalid"

        # Scraping artifact: an email glued into the URL (e.g. https://hi@acme.com/)
        if "@" in normalized.split("?")[0]:
            return "URL contains @ symbol outside query string"

        to_parse = normalized if HTTP_SCHEME_RE.match(normalized) else f"https://{normalized}"
        parsed = parse_http_url(to_parse)
        if parsed is None:
            return "URL parsing failed"

        hostname = parsed.hostname
        full_path = f"{hostname}{parsed.path}".lower()
        for pattern in self.registry.snapshot():
            if pattern in hostname or pattern in full_path:
                return f"Matched blocked pattern: {pattern}"

        return None

    def is_valid(self, url: Any, log_results: bool = False, context: str = "unknown") -> bool:
        """
        Check whether a URL should be rendered as a live link

        Args:
            url: Candidate URL (None and empty strings are invalid)
            log_results: Log the verdict (debugging aid)
            context: Field the URL came from, e.g. "apply_url" (logging only)

        Returns:
            True if the URL passes every check
        """
        reason = self._rejection_reason(url)

        if log_results:
            if reason:
                logger.info(f"🚫 [{context}] Blocked: {url} ({reason})")
            else:
                logger.info(f"✅ [{context}] Valid: {url}")

        return reason is None

    def validate_with_details(self, url: Any, context: str | None = None) -> ValidationResult:
        """
        Validate a URL and report why it was rejected

        Args:
            url: Candidate URL
            context: Field the URL came from (logging only)

        Returns:
            ValidationResult with is_valid, reason and the original URL
        """
        reason = self._rejection_reason(url)
        if reason:
            logger.debug(f"[{context or 'unknown'}] {url}: {reason}")

        return ValidationResult(
            is_valid=reason is None,
            reason=reason,
            original_url=str(url) if url else "null",
        )

    def filter_valid_urls(
        self, record: Mapping[str, Any], url_fields: Iterable[str], log_results: bool = False
    ) -> dict[str, Any]:
        """
        Copy a record with invalid URL fields set to None

        Args:
            record: Any mapping holding URL fields
            url_fields: Keys to validate
            log_results: Log each verdict

        Returns:
            New dict; the input record is left untouched
        """
        filtered = dict(record)
        for field in url_fields:
            url = record.get(field)
            if url and not self.is_valid(url, log_results=log_results, context=str(field)):
                filtered[field] = None
        return filtered


def _settings_patterns() -> list[str]:
    from founder_flow.config import load_settings

    return load_settings().extra_blocked_patterns


_default_lock = threading.Lock()
_default_validator: UrlValidator | None = None


def get_default_validator() -> UrlValidator:
    """
    Process-wide validator used by the module-level helpers

    Built on first use from DEFAULT_BLOCKED_PATTERNS plus any patterns from
    FOUNDER_FLOW_EXTRA_BLOCKED_PATTERNS.
    """
    global _default_validator
    with _default_lock:
        if _default_validator is None:
            registry = BlockedPatternRegistry()
            for pattern in _settings_patterns():
                registry.add(pattern)
            _default_validator = UrlValidator(registry)
        return _default_validator


def reset_default_validator() -> None:
    """Drop the process-wide validator; the next call rebuilds it"""
    global _default_validator
    with _default_lock:
        _default_validator = None


def is_valid_actionable_url(
    url: str | None, log_results: bool = False, context: str = "unknown"
) -> bool:
    return get_default_validator().is_valid(url, log_results=log_results, context=context)


def validate_url_with_details(url: str | None, context: str | None = None) -> ValidationResult:
    return get_default_validator().validate_with_details(url, context=context)


def filter_valid_urls(
    record: Mapping[str, Any], url_fields: Iterable[str], log_results: bool = False
) -> dict[str, Any]:
    return get_default_validator().filter_valid_urls(record, url_fields, log_results=log_results)


def is_valid_apply_url(url: str | None) -> bool:
    return is_valid_actionable_url(url, context="apply_url")


def is_valid_company_url(url: str | None) -> bool:
    return is_valid_actionable_url(url, context="company_url")


def add_blocked_pattern(pattern: str) -> None:
    """Block a new URL substring for the rest of the process lifetime"""
    if get_default_validator().registry.add(pattern):
        logger.info(f"➕ Added blocked pattern: {pattern}")


def get_blocked_patterns() -> list[str]:
    return get_default_validator().registry.list()
