"""
Link Preview - Fetch the og:image for a LinkedIn profile or company page

Only LinkedIn hosts are fetched; any other URL returns None without a request.
Every failure (bad URL, HTTP error, timeout, missing tag) also returns None,
so callers can fall back to a favicon or initials.
"""

import logging

import requests
from bs4 import BeautifulSoup

from founder_flow.utils.url_normalizer import parse_http_url

logger = logging.getLogger(__name__)

# Only the start of the page is scanned; og tags live in <head>
MAX_HTML_CHARS = 1_000_000

PREVIEW_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}


def is_linkedin_host(host: str) -> bool:
    h = host.lower()
    return h == "linkedin.com" or h.endswith(".linkedin.com")


def extract_og_image(html: str) -> str | None:
    """
    Find the og:image URL in an HTML document

    Args:
        html: Page HTML

    Returns:
        Content of the first og:image meta tag (property= or name=), or None
    """
    soup = BeautifulSoup(html[:MAX_HTML_CHARS], "html.parser")

    for attr in ("property", "name"):
        tag = soup.find("meta", attrs={attr: "og:image"})
        if tag and tag.get("content"):
            return str(tag["content"]).strip() or None

    return None


def fetch_link_preview_image(
    url: str | None,
    session: requests.Session | None = None,
    timeout: float = 5,
) -> str | None:
    """
    Fetch the preview image of a LinkedIn page

    Args:
        url: Absolute LinkedIn URL
        session: Optional requests session (default: module-level requests)
        timeout: Request timeout in seconds

    Returns:
        og:image URL, or None
    """
    parsed = parse_http_url(url)
    if parsed is None:
        return None
    if not is_linkedin_host(parsed.hostname):
        logger.debug(f"Skipping preview for non-LinkedIn URL: {url}")
        return None

    http = session or requests
    try:
        response = http.get(parsed.href, headers=PREVIEW_HEADERS, timeout=timeout)
    except requests.Timeout:
        logger.warning(f"Timeout fetching link preview: {url}")
        return None
    except requests.RequestException as e:
        logger.warning(f"Request error fetching link preview: {url} - {e}")
        return None

    if not 200 <= response.status_code < 300:
        logger.debug(f"Link preview HTTP {response.status_code} for {url}")
        return None

    return extract_og_image(response.text or "")
