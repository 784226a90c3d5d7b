import unittest

from domsanitize.urls import has_allowed_protocol, is_relative_link, is_safe_link, url_scheme


class TestUrls(unittest.TestCase):
    def test_relative_links(self) -> None:
        assert is_relative_link("/a")
        assert is_relative_link("./a")
        assert is_relative_link("../a")
        assert not is_relative_link("a/b")
        assert not is_relative_link("#frag")

    def test_url_scheme(self) -> None:
        assert url_scheme("https://example.com/x") == "https"
        assert url_scheme("HTTPS://example.com") == "https"
        assert url_scheme("magnet:?xt=urn:btih:abc") == "magnet"
        assert url_scheme("javascript:alert(1)") == "javascript"
        assert url_scheme("example.com") is None
        assert url_scheme("") is None

    def test_whitespace_and_control_characters_are_ignored(self) -> None:
        assert url_scheme("  https://example.com  ") == "https"
        assert url_scheme("java\nscript:alert(1)") == "javascript"
        assert url_scheme("\x01javascript:alert(1)") == "javascript"

    def test_unparseable_urls_have_no_scheme(self) -> None:
        assert url_scheme("http://[::1") is None
        assert url_scheme("http://example.com:notaport/") is None
        assert url_scheme("http://") is None
        assert url_scheme("https:") is None
        assert url_scheme("https://exa mple.com") is None
        assert url_scheme("http://a<b>/") is None
        assert url_scheme("https://%zz/") is None
        assert url_scheme("http://exa\x00mple.com") is None
        assert url_scheme("http://a^b|c/") is None
        assert url_scheme("ipfs://ba fy") is None

    def test_valid_hosts_and_ip_literals(self) -> None:
        assert url_scheme("https://%6Bx.example/") == "https"
        assert url_scheme("http://[::1]:8080/") == "http"
        assert url_scheme("http://127.0.0.1/") == "http"
        assert url_scheme("https://user:pw@example.com/") == "https"

    def test_special_schemes_tolerate_missing_slashes(self) -> None:
        assert url_scheme("https:example.com") == "https"
        assert url_scheme("http:/example.com") == "http"
        assert url_scheme("HTTPS:///example.com") == "https"
        assert is_safe_link("https:example.com")

    def test_allowed_protocols(self) -> None:
        assert has_allowed_protocol("https://ok.example")
        assert has_allowed_protocol("ipfs://bafy")
        assert not has_allowed_protocol("javascript:evil()")
        assert not has_allowed_protocol("data:text/html,x")
        assert not has_allowed_protocol("ftp://example.com")
        assert has_allowed_protocol("ftp://example.com", {"ftp"})

    def test_is_safe_link(self) -> None:
        assert is_safe_link("/local")
        assert is_safe_link("gemini://example.org")
        assert not is_safe_link("vbscript:x")
        assert not is_safe_link("not a url")
