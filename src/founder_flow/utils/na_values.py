"""
NA Values - Detect placeholder "not available" values in scraped records

Scraped founder listings mark missing data inconsistently: empty strings,
"N/A", "none", "-", "tbd", zero-width spaces and so on. Everything downstream
works on real optionals, so records are normalized once with
normalize_optional_string() at the ingestion boundary.

Examples:
    >>> is_na(" N/A ")
    True
    >>> is_na("n.a.")
    True
    >>> normalize_optional_string("  acme.com ")
    'acme.com'
"""

import re
from typing import Any

ZERO_WIDTH_RE = re.compile("[\u200b-\u200d\ufeff]")

# Separators and punctuation ignored when comparing against NA tokens:
# whitespace . / \ _ - en dash, em dash, fraction slash
NA_SEPARATORS_RE = re.compile("[\\s./\\\\_\\-\u2013\u2014\u2044]")

NA_TOKENS = frozenset({"na", "none", "null", "undefined", "tbd"})

DASH_TOKENS = frozenset({"-", "\u2014"})


def _clean(value: Any) -> str:
    return ZERO_WIDTH_RE.sub("", str(value)).strip()


def is_na(value: Any) -> bool:
    """
    Check whether a value represents "not available"

    Args:
        value: Any raw field value (None, string, number, ...)

    Returns:
        True if the value is None, blank, a dash, or an NA-like token
    """
    if value is None:
        return True

    s = _clean(value).lower()
    if not s:
        return True
    if s in DASH_TOKENS:
        return True

    return NA_SEPARATORS_RE.sub("", s) in NA_TOKENS


def normalize_optional_string(raw: Any) -> str | None:
    """Return the trimmed string, or None when the value is NA-like"""
    if is_na(raw):
        return None
    return _clean(raw)


def first_non_na(*values: Any) -> Any:
    """
    Return the first value that is not None and not an NA-like string

    Non-string values are returned unchanged.
    """
    for value in values:
        if value is None:
            continue
        if isinstance(value, str) and is_na(value):
            continue
        return value
    return None


def tags_from(value: Any, max_tags: int = 6) -> list[str]:
    """
    Split a comma-separated field into unique, non-NA tags

    Args:
        value: Raw field such as "AI, Fintech, N/A, AI"
        max_tags: Maximum number of tags to return

    Returns:
        Ordered list of unique tags (e.g. ["AI", "Fintech"])
    """
    if is_na(value):
        return []

    tags: list[str] = []
    for item in str(value).split(","):
        tag = item.strip()
        if not tag or is_na(tag):
            continue
        if tag not in tags:
            tags.append(tag)

    return tags[:max_tags]
