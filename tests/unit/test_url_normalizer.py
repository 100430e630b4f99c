"""
Unit tests for the URL normalizer

Covers absolute URL building, canonical comparison keys, domain extraction
and email cleanup for messy scraped values.
"""

import pytest

from founder_flow.utils.url_normalizer import (
    as_http_url,
    canonicalize_url,
    clean_email,
    favicon_url,
    get_domain_from_url,
    mailto_href,
    parse_http_url,
    pretty_domain,
)


class TestAsHttpUrl:
    """Tests for as_http_url"""

    def test_bare_domain_gets_https(self):
        assert as_http_url("acme.com") == "https://acme.com/"

    def test_scheme_less_path(self):
        assert as_http_url("Acme.com/careers") == "https://acme.com/careers"

    def test_existing_scheme_kept(self):
        assert as_http_url("http://acme.com/jobs?team=eng#open") == "http://acme.com/jobs?team=eng#open"

    def test_uppercase_scheme_and_host_lowercased(self):
        assert as_http_url("HTTPS://ACME.com/About") == "https://acme.com/About"

    def test_whitespace_trimmed(self):
        assert as_http_url("  acme.com/about \n") == "https://acme.com/about"

    def test_spaces_in_path_are_encoded(self):
        assert as_http_url("acme.com/open roles") == "https://acme.com/open%20roles"

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("https://acme.com:443/jobs", "https://acme.com/jobs"),
            ("http://acme.com:80", "http://acme.com/"),
            ("acme.com:443/careers", "https://acme.com/careers"),
            ("http://acme.com:443/", "http://acme.com:443/"),
            ("https://acme.com:8080/", "https://acme.com:8080/"),
        ],
    )
    def test_default_port_dropped(self, value, expected):
        assert as_http_url(value) == expected

    def test_non_ascii_host_punycoded(self):
        assert as_http_url("bücher.de/team") == "https://xn--bcher-kva.de/team"

    @pytest.mark.parametrize("value", [None, "", "N/A", "tbd", "-", " none "])
    def test_na_values_return_none(self, value):
        assert as_http_url(value) is None

    @pytest.mark.parametrize("value", ["coming soon", "https://", "https://acme.com:99999/"])
    def test_unparseable_returns_none(self, value):
        assert as_http_url(value) is None


class TestCanonicalizeUrl:
    """Tests for canonicalize_url"""

    def test_case_and_trailing_slash_normalized(self):
        """Scheme and host case and a trailing slash do not affect the key"""
        assert canonicalize_url("HTTPS://Example.com/path/") == canonicalize_url(
            "https://example.com/path"
        )
        assert canonicalize_url("https://example.com/path") == "https://example.com/path"

    def test_query_and_fragment_dropped(self):
        assert canonicalize_url("https://acme.com/careers/?ref=li#top") == "https://acme.com/careers"

    def test_root_path(self):
        assert canonicalize_url("https://acme.com/") == "https://acme.com"
        assert canonicalize_url("https://acme.com") == "https://acme.com"

    def test_path_case_preserved(self):
        assert canonicalize_url("https://acme.com/Careers") == "https://acme.com/Careers"

    @pytest.mark.parametrize("value", [None, "", "acme.com", "not a url"])
    def test_invalid_returns_none(self, value):
        assert canonicalize_url(value) is None


class TestGetDomainFromUrl:
    """Tests for get_domain_from_url"""

    def test_www_stripped(self):
        assert get_domain_from_url("https://www.Acme.com/about") == "acme.com"

    def test_bare_domain(self):
        assert get_domain_from_url("acme.com/path") == "acme.com"

    def test_mailto(self):
        assert get_domain_from_url("mailto:Jane@Acme.com") == "acme.com"

    def test_bare_email(self):
        assert get_domain_from_url("jane@acme.com") == "acme.com"

    def test_userinfo_url_uses_host(self):
        assert get_domain_from_url("https://hi@acme.com/") == "acme.com"

    def test_unparseable_falls_back_to_string_split(self):
        assert get_domain_from_url("https://www.acme co.com/about") == "acme co.com"

    @pytest.mark.parametrize("value", [None, "", "mailto:", "jane@"])
    def test_no_domain(self, value):
        assert get_domain_from_url(value) is None


class TestCleanEmail:
    """Tests for clean_email"""

    def test_mailto_prefix_removed(self):
        assert clean_email("mailto:jane@acme.com") == "jane@acme.com"
        assert clean_email("MAILTO:jane@acme.com") == "jane@acme.com"

    def test_trimmed(self):
        assert clean_email("  Jane@Acme.com ") == "Jane@Acme.com"

    @pytest.mark.parametrize("value", [None, "none", "N/A", "jane@acme", "jane doe@acme.com", "acme.com"])
    def test_invalid_returns_none(self, value):
        assert clean_email(value) is None


class TestSmallHelpers:
    """Tests for mailto_href, pretty_domain, favicon_url and parse_http_url"""

    def test_mailto_href(self):
        assert mailto_href("jane@acme.com") == "mailto:jane@acme.com"
        assert mailto_href(None) is None

    def test_pretty_domain(self):
        assert pretty_domain("https://www.acme.com/team") == "acme.com"
        assert pretty_domain("acme.com") is None
        assert pretty_domain(None) is None

    def test_favicon_url(self):
        assert favicon_url("jane@acme.com") == "https://icons.duckduckgo.com/ip3/acme.com.ico"
        assert favicon_url(None) is None

    def test_parse_http_url_parts(self):
        parsed = parse_http_url("https://Jane@WWW.Acme.com:8443/jobs?x=1#y")
        assert parsed is not None
        assert parsed.hostname == "www.acme.com"
        assert parsed.port == 8443
        assert parsed.userinfo == "Jane"
        assert parsed.href == "https://Jane@www.acme.com:8443/jobs?x=1#y"
        assert parse_http_url("https://acme.com:443/").port is None

    def test_parse_http_url_rejects_other_schemes(self):
        assert parse_http_url("ftp://acme.com") is None
        assert parse_http_url("javascript:void(0)") is None
        assert parse_http_url(123) is None
