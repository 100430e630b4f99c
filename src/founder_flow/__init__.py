"""
Founder Flow link engine

Normalizes, classifies and validates the links found in scraped founder
listings so listing views only render links worth clicking.
"""

from founder_flow.models import ClassifiedLinks, RawEntry, ValidationResult
from founder_flow.utils.link_classifier import choose_links, filter_actionable_entries
from founder_flow.utils.url_normalizer import (
    as_http_url,
    canonicalize_url,
    clean_email,
    get_domain_from_url,
    mailto_href,
)
from founder_flow.utils.url_validator import (
    add_blocked_pattern,
    get_blocked_patterns,
    is_valid_actionable_url,
    validate_url_with_details,
)

__version__ = "0.1.0"

__all__ = [
    "ClassifiedLinks",
    "RawEntry",
    "ValidationResult",
    "add_blocked_pattern",
    "as_http_url",
    "canonicalize_url",
    "choose_links",
    "clean_email",
    "filter_actionable_entries",
    "get_blocked_patterns",
    "get_domain_from_url",
    "is_valid_actionable_url",
    "mailto_href",
    "validate_url_with_details",
]
