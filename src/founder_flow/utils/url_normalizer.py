"""
URL Normalizer - Turn messy scraped strings into absolute URLs, domains and emails

Scraped records hold URLs in every shape: bare domains ("acme.com"),
scheme-less paths ("acme.com/careers"), mixed-case hosts, mailto links and
plain email addresses. This module converts them into:

- absolute https URLs for display (as_http_url)
- canonical comparison keys for de-duplication (canonicalize_url)
- bare domains for favicons and labels (get_domain_from_url)
- cleaned email addresses and mailto hrefs (clean_email, mailto_href)

Every function degrades to None on malformed input and never raises.

Examples:
    >>> as_http_url("Acme.com/careers")
    'https://acme.com/careers'
    >>> canonicalize_url("HTTPS://Acme.com/careers/?ref=li#top")
    'https://acme.com/careers'
    >>> get_domain_from_url("mailto:Jane@Acme.com")
    'acme.com'
"""

import re
from typing import Any, NamedTuple
from urllib.parse import quote, urlsplit

from founder_flow.utils.na_values import is_na, normalize_optional_string

HTTP_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

# Characters that can never appear in a hostname
FORBIDDEN_HOST_RE = re.compile(r"[\s#%/:<>?@\[\]\\^|\"']")

# Characters left untouched when percent-encoding path, query and fragment
URL_SAFE_CHARS = "/:@!$&'()*+,;=%~-._?#[]"

DEFAULT_PORTS = {"http": 80, "https": 443}

FAVICON_SERVICE = "https://icons.duckduckgo.com/ip3/{domain}.ico"


class ParsedUrl(NamedTuple):
    """Parsed absolute http(s) URL with a lowercased scheme and host"""

    scheme: str
    userinfo: str
    hostname: str
    port: int | None
    path: str
    query: str
    fragment: str

    @property
    def href(self) -> str:
        """Serialized absolute URL"""
        netloc = self.hostname
        if self.port is not None:
            netloc = f"{netloc}:{self.port}"
        if self.userinfo:
            netloc = f"{self.userinfo}@{netloc}"

        url = f"{self.scheme}://{netloc}{self.path}"
        if self.query:
            url += f"?{self.query}"
        if self.fragment:
            url += f"#{self.fragment}"
        return url


def parse_http_url(url: Any) -> ParsedUrl | None:
    """
    Parse an absolute http(s) URL

    Args:
        url: Candidate URL string, must include the scheme

    Returns:
        ParsedUrl, or None if the string is not a usable http(s) URL
    """
    if not isinstance(url, str):
        return None

    # Tabs and newlines are dropped anywhere, like browsers do
    text = re.sub(r"[\t\r\n]", "", url.strip())
    if not HTTP_SCHEME_RE.match(text):
        return None

    try:
        parts = urlsplit(text)
        port = parts.port
    except ValueError:
        return None

    hostname = parts.hostname
    if not hostname or FORBIDDEN_HOST_RE.search(hostname):
        return None

    if not hostname.isascii():
        try:
            hostname = hostname.encode("idna").decode("ascii")
        except UnicodeError:
            return None

    scheme = parts.scheme.lower()
    if port == DEFAULT_PORTS[scheme]:
        port = None

    netloc = parts.netloc
    userinfo = netloc.rpartition("@")[0] if "@" in netloc else ""

    return ParsedUrl(
        scheme=scheme,
        userinfo=userinfo,
        hostname=hostname.lower(),
        port=port,
        path=quote(parts.path, safe=URL_SAFE_CHARS) or "/",
        query=quote(parts.query, safe=URL_SAFE_CHARS),
        fragment=quote(parts.fragment, safe=URL_SAFE_CHARS),
    )


def as_http_url(raw: Any) -> str | None:
    """
    Convert a raw value into an absolute https URL

    Args:
        raw: URL, bare domain, or any scraped value

    Returns:
        Serialized absolute URL (https:// added when no scheme), or None
    """
    s = normalize_optional_string(raw)
    if s is None:
        return None

    if not HTTP_SCHEME_RE.match(s):
        s = f"https://{s}"

    parsed = parse_http_url(s)
    return parsed.href if parsed else None


def canonicalize_url(url: str | None) -> str | None:
    """
    Reduce a URL to scheme + lowercased host + path for equality checks

    Query string and fragment are dropped, as is a single trailing slash.
    The result is a comparison key only and is never displayed.

    Args:
        url: Absolute URL

    Returns:
        Canonical key, or None if the URL does not parse
    """
    if not url:
        return None

    parsed = parse_http_url(url)
    if parsed is None:
        return None

    path = parsed.path[:-1] if parsed.path.endswith("/") else parsed.path
    return f"{parsed.scheme}://{parsed.hostname}{path}"


def get_domain_from_url(value: str | None = None) -> str | None:
    """
    Extract a bare domain from a URL, domain, email or mailto link

    Args:
        value: e.g. "https://www.acme.com/about", "jane@acme.com"

    Returns:
        Lowercased domain without "www.", or None
    """
    if not value:
        return None

    s = value.strip()
    has_scheme = bool(HTTP_SCHEME_RE.match(s))

    if s.lower().startswith("mailto:") or ("@" in s and not has_scheme):
        if s.lower().startswith("mailto:"):
            s = s[7:]
        domain = s.split("@")[1] if "@" in s else ""
        return domain.lower() or None

    url = s if has_scheme else f"https://{s}"
    parsed = parse_http_url(url)
    if parsed is not None:
        return re.sub(r"^www\.", "", parsed.hostname, flags=re.IGNORECASE) or None

    # Unparseable: strip the scheme by hand and keep the host part
    host = re.sub(r"^https?://(www\.)?", "", url, flags=re.IGNORECASE).split("/")[0]
    return host.lower() or None


def clean_email(raw: Any) -> str | None:
    """
    Extract an email address from a raw value or mailto link

    Args:
        raw: e.g. "mailto:jane@acme.com", " jane@acme.com "

    Returns:
        Trimmed email if it has a minimal user@domain.tld shape, else None
    """
    if is_na(raw):
        return None

    s = str(raw).strip()
    if s.lower().startswith("mailto:"):
        s = s[7:].strip()

    if not EMAIL_RE.match(s):
        return None
    return s


def mailto_href(email: str | None) -> str | None:
    if not email:
        return None
    return f"mailto:{email}"


def pretty_domain(url: str | None) -> str | None:
    """Hostname of an absolute URL without a leading www prefix"""
    parsed = parse_http_url(url)
    if parsed is None:
        return None
    return re.sub(r"^www\.", "", parsed.hostname) or None


def favicon_url(website: str | None) -> str | None:
    """Favicon service URL for a website, email or mailto link"""
    domain = get_domain_from_url(website)
    if not domain:
        return None
    return FAVICON_SERVICE.format(domain=domain)
