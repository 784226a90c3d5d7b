"""Element classification: allow, block (unwrap) or drop."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from justhtml.node import Node

    from .policy import SanitizePolicy


class _StrEnum(str, Enum):
    """Backport of enum.StrEnum (Python 3.11+)."""


class ElementAction(_StrEnum):
    ALLOW = "allow"
    BLOCK = "block"
    DROP = "drop"


def is_custom_element(node: Node) -> bool:
    """Return True for hyphenated tag names or elements carrying `is`."""

    if "-" in str(node.name):
        return True
    attrs = node.attrs
    return bool(attrs) and any(key.lower() == "is" for key in attrs)


def classify(tag: str, is_custom: bool, policy: SanitizePolicy) -> ElementAction:
    """Classify a tag against the policy's element lists.

    The allow list wins over the block list, which wins over the drop list.
    Unlisted elements are allowed.
    """

    tag = tag.lower()
    if policy.element_listed(policy.allow_elements, tag, is_custom):
        return ElementAction.ALLOW
    if policy.element_listed(policy.block_elements, tag, is_custom):
        return ElementAction.BLOCK
    if policy.element_listed(policy.drop_elements, tag, is_custom):
        return ElementAction.DROP
    return ElementAction.ALLOW


def classify_element(node: Node, policy: SanitizePolicy) -> ElementAction:
    return classify(str(node.name), is_custom_element(node), policy)
