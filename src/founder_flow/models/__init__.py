"""Models package

Typed views over scraped founder listings and link classification results.
"""

from .entry import (
    ClassifiedLinks,
    FlexUrlField,
    RawEntry,
    ValidationResult,
    decode_flex_url,
)

__all__ = [
    "ClassifiedLinks",
    "FlexUrlField",
    "RawEntry",
    "ValidationResult",
    "decode_flex_url",
]
