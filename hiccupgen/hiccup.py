"""Hiccup structures to virtual DOM nodes.

A hiccup structure is a list ``[tag_or_component, attrs?, *children]``:

- ``tag_or_component`` is a selector string (``"div#id.cls"``), a component
  (anything exposing ``view``), a plain ``(attrs, children)`` render function,
  a nested hiccup structure, or ``None``/``""`` for a fragment.
- ``attrs`` is an optional mapping in second position.
- children are hiccup structures, strings, numbers, vnodes or placeholders
  such as ``None`` and ``False``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Dict, List

from .vdom import FRAGMENT, is_component, is_vnode, m

Construct = Callable[[Any, Dict[str, Any], List[Any]], Any]


@dataclass(frozen=True, eq=False)
class FunctionComponent:
    """Adapts a ``render(attrs, children)`` function to a zero-argument ``view``.

    ``attrs`` and ``children`` are copied when the component is built, so
    every ``view()`` call sees the values captured at normalization time.
    """

    render: Callable[[Dict[str, Any], List[Any]], Any]
    attrs: Dict[str, Any]
    children: List[Any]

    def __post_init__(self) -> None:
        object.__setattr__(self, "attrs", dict(self.attrs))
        object.__setattr__(self, "children", list(self.children))

    def view(self) -> Any:
        return self.render(self.attrs, self.children)

    def extend(self, attrs: Dict[str, Any], children: List[Any]) -> "FunctionComponent":
        return FunctionComponent(self.render, {**self.attrs, **attrs}, [*self.children, *children])


def _is_structure(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _is_attrs_map(value: Any) -> bool:
    if not isinstance(value, Mapping) or is_vnode(value):
        return False
    return "tag" not in value and "view" not in value


def _is_fragment_head(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def htm(node: Any, construct: Construct = m) -> Any:
    """Normalize a hiccup node into a vnode, a primitive or ``None``.

    Anything that is not a list or tuple is returned unchanged. ``construct``
    builds the vnode for each structure and defaults to :func:`hiccupgen.vdom.m`.
    """

    if not _is_structure(node):
        return node
    if len(node) == 0:
        return None

    head = node[0]
    if _is_structure(head) and not is_component(head):
        head = htm(head, construct)

    attrs: Dict[str, Any] = {}
    start = 1
    if len(node) > 1 and _is_attrs_map(node[1]):
        attrs = node[1]
        start = 2

    if _is_fragment_head(head):
        head = FRAGMENT

    children = [htm(child, construct) for child in node[start:]]

    if callable(head) and not is_component(head) and not is_vnode(head):
        head = FunctionComponent(head, attrs, children)
        attrs = {}

    if is_vnode(head) and isinstance(head.tag, FunctionComponent) and (attrs or children):
        # The adapter only sees the attrs and children it captured.
        wrapped = head.tag.extend(attrs, children)
        return construct(wrapped, {}, wrapped.children)

    if is_vnode(head) and not attrs and not children:
        return head
    return construct(head, attrs, children)


__all__ = ["Construct", "FunctionComponent", "htm"]
