"""Policy-driven sanitization of parsed HTML trees."""

from __future__ import annotations

import logging

from .attributes import sanitize_attributes
from .classify import ElementAction, classify, classify_element, is_custom_element
from .constants import CUSTOM_ELEMENT_SCOPE, GLOBAL_SCOPE, LINK_PROTOCOLS
from .policy import DEFAULT_POLICY, AttributeFilter, ReportCallback, SanitizePolicy
from .sanitizer import (
    PendingAction,
    apply_actions,
    collect_actions,
    parse_fragment,
    sanitize,
    sanitize_html,
    sanitize_transform,
)
from .urls import has_allowed_protocol, is_relative_link, is_safe_link, url_scheme

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "CUSTOM_ELEMENT_SCOPE",
    "DEFAULT_POLICY",
    "GLOBAL_SCOPE",
    "LINK_PROTOCOLS",
    "AttributeFilter",
    "ElementAction",
    "PendingAction",
    "ReportCallback",
    "SanitizePolicy",
    "apply_actions",
    "classify",
    "classify_element",
    "collect_actions",
    "has_allowed_protocol",
    "is_custom_element",
    "is_relative_link",
    "is_safe_link",
    "parse_fragment",
    "sanitize",
    "sanitize_attributes",
    "sanitize_html",
    "sanitize_transform",
    "url_scheme",
]
