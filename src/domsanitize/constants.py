"""Shared constants for policy scopes and link checks."""

from __future__ import annotations

# Scope key matching any custom element (hyphenated tag or `is` attribute).
CUSTOM_ELEMENT_SCOPE = "*-"

# Scope key matching every element. Only valid for attribute tables.
GLOBAL_SCOPE = "*"

LINK_PROTOCOLS: frozenset[str] = frozenset(
    {
        "http",
        "https",
        "dat",
        "dweb",
        "ipfs",
        "ipns",
        "ssb",
        "gopher",
        "xmpp",
        "magnet",
        "gemini",
    }
)

# Schemes that the URL standard treats as "special": they always carry a
# host, and slashes after the colon are optional.
SPECIAL_SCHEMES: frozenset[str] = frozenset({"http", "https", "ws", "wss", "ftp"})

DEFAULT_LINK_REL = "noopener nofollow noreferrer ugc"
