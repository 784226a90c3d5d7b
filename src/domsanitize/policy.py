"""Sanitization policy model.

A policy is plain, immutable configuration:

- `allow_elements`, `block_elements` and `drop_elements` decide what happens
  to an element. Entries are tag names, or `*-` for any custom element.
- `filter_attributes` maps a scope (tag name, `*-` or `*`) to an attribute
  filter. Filters are chained from most to least specific scope.
- `set_attributes` maps a scope to attributes that are forced onto matching
  elements after filtering. A forced value of None means "do not force".
- `allow_comments` keeps comment nodes when True.

Policies are safe to share between threads and sanitize calls; nothing in
this package mutates them.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Collection, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Protocol

from .constants import CUSTOM_ELEMENT_SCOPE, DEFAULT_LINK_REL, GLOBAL_SCOPE, LINK_PROTOCOLS
from .urls import is_safe_link


class AttributeFilter(Protocol):
    """Decide the fate of one attribute.

    Return True to keep it (and stop the chain), False to remove it (and stop
    the chain), a string to replace its value (the chain continues with the
    new value), or None to defer to the next filter.
    """

    def __call__(self, name: str, value: str) -> bool | str | None: ...


class ReportCallback(Protocol):
    """Receive a diagnostic message about a node the sanitizer changed."""

    def __call__(self, msg: str, *, node: Any | None = None) -> None: ...


ForcedAttributes = Mapping[str, "str | None"]

_EMPTY: Mapping[str, Any] = MappingProxyType({})

# camelCase option names accepted by `SanitizePolicy.from_mapping`.
_OPTION_ALIASES: dict[str, str] = {
    "allowElements": "allow_elements",
    "blockElements": "block_elements",
    "dropElements": "drop_elements",
    "filterAttributes": "filter_attributes",
    "setAttributes": "set_attributes",
    "allowComments": "allow_comments",
}


def _normalize_elements(option: str, value: Collection[str]) -> frozenset[str]:
    if isinstance(value, str) or not isinstance(value, Collection):
        raise TypeError(f"{option} must be a collection of tag names, got {type(value).__name__}")
    out: set[str] = set()
    for tag in value:
        if not isinstance(tag, str):
            raise TypeError(f"{option} entries must be strings, got {type(tag).__name__}")
        tag = tag.lower()
        if tag == GLOBAL_SCOPE:
            raise ValueError(f"{option} does not support the '*' scope; list tags or '*-'")
        out.add(tag)
    return frozenset(out)


def _normalize_filters(value: Mapping[str, AttributeFilter]) -> Mapping[str, AttributeFilter]:
    if not isinstance(value, Mapping):
        raise TypeError(f"filter_attributes must be a mapping, got {type(value).__name__}")
    out: dict[str, AttributeFilter] = {}
    for scope, func in value.items():
        if not callable(func):
            raise TypeError(f"Attribute filter for scope '{scope}' is not callable")
        out[str(scope).lower()] = func
    return MappingProxyType(out)


def _normalize_forces(value: Mapping[str, ForcedAttributes]) -> Mapping[str, ForcedAttributes]:
    if not isinstance(value, Mapping):
        raise TypeError(f"set_attributes must be a mapping, got {type(value).__name__}")
    out: dict[str, ForcedAttributes] = {}
    for scope, attrs in value.items():
        if not isinstance(attrs, Mapping):
            raise TypeError(f"Forced attributes for scope '{scope}' must be a mapping")
        forced: dict[str, str | None] = {}
        for name, forced_value in attrs.items():
            if forced_value is not None and not isinstance(forced_value, str):
                raise TypeError(
                    f"Forced value for '{name}' in scope '{scope}' must be a string or None, "
                    f"got {type(forced_value).__name__}"
                )
            forced[str(name).lower()] = forced_value
        out[str(scope).lower()] = MappingProxyType(forced)
    return MappingProxyType(out)


@dataclass(frozen=True, slots=True)
class SanitizePolicy:
    allow_elements: Collection[str] = field(default_factory=frozenset)
    block_elements: Collection[str] = field(default_factory=frozenset)
    drop_elements: Collection[str] = field(default_factory=frozenset)
    filter_attributes: Mapping[str, AttributeFilter] = field(default_factory=dict)
    set_attributes: Mapping[str, ForcedAttributes] = field(default_factory=dict)
    allow_comments: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "allow_elements", _normalize_elements("allow_elements", self.allow_elements))
        object.__setattr__(self, "block_elements", _normalize_elements("block_elements", self.block_elements))
        object.__setattr__(self, "drop_elements", _normalize_elements("drop_elements", self.drop_elements))
        object.__setattr__(self, "filter_attributes", _normalize_filters(self.filter_attributes))
        object.__setattr__(self, "set_attributes", _normalize_forces(self.set_attributes))
        object.__setattr__(self, "allow_comments", bool(self.allow_comments))

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> SanitizePolicy:
        """Build a policy from a dict of options.

        Both snake_case field names and the camelCase option names
        (`allowElements`, `setAttributes`, ...) are accepted.
        """

        field_names = {f.name for f in dataclasses.fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in options.items():
            name = _OPTION_ALIASES.get(key, key)
            if name not in field_names:
                raise ValueError(f"Unknown sanitize option: {key!r}")
            if name in kwargs:
                raise ValueError(f"Sanitize option given twice: {key!r}")
            kwargs[name] = value
        return cls(**kwargs)

    def replace(self, **changes: Any) -> SanitizePolicy:
        """Return a copy of this policy with `changes` applied."""

        return dataclasses.replace(self, **changes)

    @staticmethod
    def element_listed(elements: Collection[str], tag: str, is_custom: bool) -> bool:
        return tag in elements or (is_custom and CUSTOM_ELEMENT_SCOPE in elements)

    def filters_for(self, tag: str, is_custom: bool) -> list[tuple[str, AttributeFilter]]:
        """Return the (scope, filter) chain for an element, most specific first."""

        chain: list[tuple[str, AttributeFilter]] = []
        filters = self.filter_attributes
        if tag in filters:
            chain.append((tag, filters[tag]))
        if is_custom and CUSTOM_ELEMENT_SCOPE in filters:
            chain.append((CUSTOM_ELEMENT_SCOPE, filters[CUSTOM_ELEMENT_SCOPE]))
        if GLOBAL_SCOPE in filters:
            chain.append((GLOBAL_SCOPE, filters[GLOBAL_SCOPE]))
        return chain

    def forces_for(self, tag: str, is_custom: bool) -> dict[str, str | None]:
        """Return the merged forced attributes for an element.

        Scopes are overlaid tag, then `*-`, then `*`; later scopes win on
        conflicting attribute names.
        """

        forces = self.set_attributes
        merged: dict[str, str | None] = dict(forces.get(tag, _EMPTY))
        if is_custom:
            merged.update(forces.get(CUSTOM_ELEMENT_SCOPE, _EMPTY))
        merged.update(forces.get(GLOBAL_SCOPE, _EMPTY))
        return merged


def _reject_attribute(name: str, value: str) -> bool:
    return False


def _filter_link_attribute(name: str, value: str) -> bool | None:
    if name == "href":
        return is_safe_link(value, LINK_PROTOCOLS)
    return None


_IMAGE_ATTRIBUTES = frozenset({"src", "height", "width", "alt"})


def _filter_image_attribute(name: str, value: str) -> bool | None:
    if name in _IMAGE_ATTRIBUTES:
        return True
    return None


DEFAULT_POLICY: SanitizePolicy = SanitizePolicy(
    drop_elements=["script", CUSTOM_ELEMENT_SCOPE, "iframe"],
    filter_attributes={
        GLOBAL_SCOPE: _reject_attribute,
        "a": _filter_link_attribute,
        "img": _filter_image_attribute,
    },
    set_attributes={
        "a": {
            "rel": DEFAULT_LINK_REL,
            "target": "_blank",
        },
    },
    allow_comments=False,
)
