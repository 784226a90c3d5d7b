"""Link checks used by the default attribute filters."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING
from urllib.parse import unquote, urlsplit

from .constants import LINK_PROTOCOLS, SPECIAL_SCHEMES

if TYPE_CHECKING:
    from collections.abc import Collection

# The URL standard trims C0 controls and spaces from both ends, and removes
# ASCII tab/newline anywhere in the input before parsing.
_C0_CONTROL_OR_SPACE = "".join(chr(i) for i in range(0x21))
_TAB_OR_NEWLINE = str.maketrans("", "", "\t\n\r")

# Code points a URL host may never contain.
_FORBIDDEN_HOST = frozenset("\x00\t\n\r #/:<>?@[\\]^|")
# Domains of special-scheme URLs are stricter: no C0 controls, `%` or DEL.
_FORBIDDEN_DOMAIN = _FORBIDDEN_HOST | frozenset(chr(i) for i in range(0x20)) | frozenset("%\x7f")

_BAD_PERCENT_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def _normalize_url(value: str) -> str:
    return value.strip(_C0_CONTROL_OR_SPACE).translate(_TAB_OR_NEWLINE)


def _valid_host(host: str, special: bool) -> bool:
    if _BAD_PERCENT_RE.search(host):
        return False
    if special:
        return not any(ch in _FORBIDDEN_DOMAIN for ch in unquote(host))
    return not any(ch in _FORBIDDEN_HOST for ch in host)


def is_relative_link(value: str) -> bool:
    """Return True for path-relative or root-relative links (`/x`, `./x`, `../x`)."""

    return value.startswith(("/", "."))


def url_scheme(value: str) -> str | None:
    """Return the lower-cased scheme of an absolute URL.

    Returns None when `value` has no scheme or does not parse as a URL:
    malformed IPv6 literals, invalid ports, forbidden host code points, or a
    special scheme (`http`, `https`, ...) without a host.
    """

    url = _normalize_url(value)
    try:
        parts = urlsplit(url)
        scheme = parts.scheme.lower()
        if not scheme:
            return None
        special = scheme in SPECIAL_SCHEMES
        if special and not parts.netloc:
            # Special schemes ignore missing or extra slashes: `https:host`
            # and `http:/host` both name a host.
            rest = url[len(scheme) + 1 :].lstrip("/\\")
            parts = urlsplit(f"{scheme}://{rest}")
        if parts.netloc:
            # Raises ValueError for non-numeric or out-of-range ports.
            _ = parts.port
            host = parts.hostname or ""
            # Bracketed IPv6 literals are validated by urlsplit itself.
            if "[" not in parts.netloc and not _valid_host(host, special):
                return None
        if special and not parts.hostname:
            return None
    except ValueError:
        return None
    return scheme


def has_allowed_protocol(value: str, protocols: Collection[str] = LINK_PROTOCOLS) -> bool:
    scheme = url_scheme(value)
    return scheme is not None and scheme in protocols


def is_safe_link(value: str, protocols: Collection[str] = LINK_PROTOCOLS) -> bool:
    """Return True if `value` is relative or uses one of `protocols`."""

    if is_relative_link(value):
        return True
    return has_allowed_protocol(value, protocols)
