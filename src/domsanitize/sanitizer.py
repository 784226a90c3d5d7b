"""Two-phase tree sanitizer.

Phase one walks the tree in document order and records one pending action per
element or comment that needs work. Nothing is mutated while walking.

Phase two replays the pending actions from last to first. Because the walk is
pre-order, every node's descendants were recorded after it, so they reach
their final state before the node itself is removed or unwrapped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from justhtml import JustHTML
from justhtml.context import FragmentContext
from justhtml.node import Node, Template, Text
from justhtml.transforms import EditDocument

from .attributes import sanitize_attributes
from .classify import ElementAction, classify_element
from .policy import DEFAULT_POLICY, SanitizePolicy

if TYPE_CHECKING:
    from .policy import ReportCallback


logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PendingAction:
    kind: Literal["remove", "unwrap", "attributes"]
    node: Node


def _push_children(stack: list[Node], node: Node) -> None:
    # Popped in reverse: children first, then template content.
    if type(node) is Template and node.template_content is not None and node.template_content.children:
        stack.extend(reversed(node.template_content.children))
    if node.children:
        stack.extend(reversed(node.children))


def collect_actions(root: Node, policy: SanitizePolicy) -> list[PendingAction]:
    """Return the pending actions for every element and comment below `root`.

    The root itself is not classified. Text and doctype nodes are skipped;
    document containers are descended into.
    """

    actions: list[PendingAction] = []
    stack: list[Node] = []
    _push_children(stack, root)

    while stack:
        node = stack.pop()
        name = node.name

        if name == "#text":
            continue

        if name == "#comment":
            if not policy.allow_comments:
                actions.append(PendingAction("remove", node))
            continue

        if name != "!doctype" and name[0] != "#":
            action = classify_element(node, policy)
            if action is ElementAction.DROP:
                actions.append(PendingAction("remove", node))
            elif action is ElementAction.BLOCK:
                actions.append(PendingAction("unwrap", node))
            else:
                actions.append(PendingAction("attributes", node))

        _push_children(stack, node)

    return actions


def _unwrap(node: Node) -> None:
    parent = node.parent
    if parent is None:
        return

    moved: list[Node] = []
    if node.children:
        moved.extend(list(node.children))
        node.children = []

    if type(node) is Template and node.template_content is not None:
        tc = node.template_content
        moved.extend(tc.children or [])
        tc.children = []

    for child in moved:
        parent.insert_before(child, node)
    parent.remove_child(node)


def apply_actions(
    actions: list[PendingAction],
    policy: SanitizePolicy,
    *,
    report: ReportCallback | None = None,
) -> None:
    """Run `actions` in reverse order of collection."""

    for action in reversed(actions):
        node = action.node
        kind = action.kind

        if kind == "attributes":
            sanitize_attributes(node, policy, report=report)
            continue

        if kind == "unwrap":
            if report is not None:
                report(f"Unwrapped <{str(node.name).lower()}>", node=node)
            _unwrap(node)
            continue

        # kind == "remove"
        if report is not None:
            if node.name == "#comment":
                report("Dropped comment", node=node)
            else:
                report(f"Dropped <{str(node.name).lower()}>", node=node)
        parent = node.parent
        if parent is not None:
            parent.remove_child(node)


def parse_fragment(html: str) -> JustHTML:
    """Parse `html` as body content without JustHTML's own sanitization."""

    return JustHTML(html, safe=False, fragment_context=FragmentContext("div"))


def sanitize(
    fragment: str | JustHTML | Node,
    policy: SanitizePolicy = DEFAULT_POLICY,
    *,
    report: ReportCallback | None = None,
) -> Node:
    """Sanitize a fragment in place and return its root node.

    `fragment` may be markup text (parsed as a fragment in a `<div>`
    context), a parsed `JustHTML` document, or any node. Node input is
    mutated in place and returned.

    Exceptions raised by policy filters propagate; the tree is then left
    partially sanitized.
    """

    if isinstance(fragment, str):
        root = parse_fragment(fragment).root
    elif isinstance(fragment, JustHTML):
        root = fragment.root
    elif isinstance(fragment, Text):
        return fragment
    elif isinstance(fragment, Node):
        root = fragment
    else:
        raise TypeError(f"Cannot sanitize {type(fragment).__name__}; expected str, JustHTML or Node")

    actions = collect_actions(root, policy)
    apply_actions(actions, policy, report=report)
    logger.debug("Sanitized <%s>: applied %d pending actions", root.name, len(actions))
    return root


def sanitize_html(
    html: str,
    policy: SanitizePolicy = DEFAULT_POLICY,
    *,
    report: ReportCallback | None = None,
) -> str:
    """Sanitize markup text and serialize the result."""

    doc = parse_fragment(html)
    sanitize(doc, policy, report=report)
    return doc.to_html(pretty=False)


def sanitize_transform(
    policy: SanitizePolicy = DEFAULT_POLICY,
    *,
    report: ReportCallback | None = None,
) -> EditDocument:
    """Return a JustHTML transform that sanitizes the parsed document.

    Use with `JustHTML(..., safe=False, transforms=[sanitize_transform()])`
    so that this policy is the only sanitizer applied.
    """

    def _sanitize_root(root: Node) -> None:
        sanitize(root, policy, report=report)

    return EditDocument(_sanitize_root)
