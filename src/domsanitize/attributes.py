"""Attribute filtering and forced attributes for a single element."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .classify import is_custom_element

if TYPE_CHECKING:
    from justhtml.node import Node

    from .policy import ReportCallback, SanitizePolicy


def sanitize_attributes(node: Node, policy: SanitizePolicy, *, report: ReportCallback | None = None) -> None:
    """Rewrite `node.attrs` in place according to `policy`.

    Each attribute runs through the element's filter chain (tag scope, then
    `*-` for custom elements, then `*`):

    - True keeps the attribute and ends the chain.
    - False removes the attribute and ends the chain.
    - A string replaces the value; the next filter sees the new value.
    - None defers to the next filter.

    An attribute that reaches the end of the chain is kept with its current
    value. Forced attributes are applied afterwards and always win.
    """

    tag = str(node.name).lower()
    is_custom = is_custom_element(node)
    chain = policy.filters_for(tag, is_custom)
    forces = policy.forces_for(tag, is_custom)

    attrs = node.attrs
    if attrs is None:
        if not forces:
            return
        attrs = {}
        node.attrs = attrs

    if chain and attrs:
        # Iterate over a snapshot; removals below must not skip attributes.
        for name, raw_value in list(attrs.items()):
            value = "" if raw_value is None else raw_value
            for scope, func in chain:
                result = func(name, value)
                if result is True:
                    break
                if result is False:
                    del attrs[name]
                    if report is not None:
                        report(f"Removed attribute '{name}' from <{tag}> (scope '{scope}')", node=node)
                    break
                if result is None:
                    continue
                if isinstance(result, str):
                    attrs[name] = result
                    value = result
                    continue
                raise TypeError(
                    f"Attribute filter for scope '{scope}' returned {type(result).__name__}; "
                    "expected bool, str or None"
                )

    for name, forced_value in forces.items():
        if forced_value is None:
            continue
        for existing in [key for key in attrs if key != name and key.lower() == name]:
            del attrs[existing]
        attrs[name] = forced_value
