"""Virtual DOM node model and hyperscript constructor."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Dict, List, Tuple

FRAGMENT = "["
TRUST = "<"

SELECTOR_RE = re.compile(
    r"""(?:(^|#|\.)([^#.\[\]]+))|(\[(.+?)(?:\s*=\s*("|'|)((?:\\["'\]]|.)*?)\5)?\])"""
)
ESCAPED_QUOTE_RE = re.compile(r"""\\(["'])""")


@dataclass
class Vnode:
    tag: Any
    key: Any = None
    attrs: Dict[str, Any] = field(default_factory=dict)
    children: List[Any] = field(default_factory=list)
    text: str | None = None


def is_vnode(value: Any) -> bool:
    return isinstance(value, Vnode)


def is_component(value: Any) -> bool:
    """Return True for objects, classes or mappings that expose a callable ``view``."""

    if isinstance(value, Vnode):
        return False
    if isinstance(value, Mapping):
        return callable(value.get("view"))
    return callable(getattr(value, "view", None))


def _is_attrs(value: Any) -> bool:
    return isinstance(value, Mapping) and not is_component(value)


@lru_cache(maxsize=1024)
def _compile_selector(selector: str) -> Tuple[str, Tuple[Tuple[str, Any], ...]]:
    tag = "div"
    classes: List[str] = []
    attrs: Dict[str, Any] = {}
    for match in SELECTOR_RE.finditer(selector):
        kind, value, bracket, name, _quote, attr_value = match.groups()
        if kind == "" and value:
            tag = value
        elif kind == "#":
            attrs["id"] = value
        elif kind == ".":
            classes.append(value)
        elif bracket and name:
            if attr_value:
                attr_value = ESCAPED_QUOTE_RE.sub(r"\1", attr_value).replace("\\\\", "\\")
            if name == "class":
                classes.append(attr_value or "")
            else:
                attrs[name] = attr_value if attr_value is not None else True
    if classes:
        attrs["class"] = " ".join(classes)
    return tag, tuple(attrs.items())


def _normalize_children(children: List[Any]) -> List[Any]:
    normalized: List[Any] = []
    for child in children:
        if isinstance(child, (list, tuple)):
            normalized.append(Vnode(tag=FRAGMENT, children=_normalize_children(list(child))))
        else:
            normalized.append(child)
    return normalized


def _exec_selector(selector: str, attrs: Dict[str, Any], children: List[Any]) -> Vnode:
    tag, selector_attrs = _compile_selector(selector)
    merged: Dict[str, Any] = dict(selector_attrs)
    class_parts: List[str] = []
    if "class" in merged:
        class_parts.append(merged.pop("class"))

    has_class_key = False
    for name, value in attrs.items():
        if name in ("class", "className"):
            has_class_key = True
            if value is not None and value != "":
                class_parts.append(str(value))
            continue
        merged[name] = value

    if class_parts:
        merged["class"] = " ".join(class_parts)
    elif has_class_key:
        merged["class"] = attrs.get("class", attrs.get("className"))

    return Vnode(tag=tag, key=attrs.get("key"), attrs=merged, children=_normalize_children(children))


def _merge_element_attrs(base: Dict[str, Any], extra: Dict[str, Any]) -> Dict[str, Any]:
    merged = {**base, **extra}
    merged.pop("className", None)
    class_parts = [
        str(value)
        for value in (base.get("class"), extra.get("class"), extra.get("className"))
        if value is not None and value != ""
    ]
    if class_parts:
        merged["class"] = " ".join(class_parts)
    return merged


def _split_args(args: Tuple[Any, ...]) -> Tuple[Dict[str, Any], List[Any]]:
    attrs: Dict[str, Any] = {}
    if args and (args[0] is None or _is_attrs(args[0])):
        attrs = dict(args[0] or {})
        args = args[1:]
    if len(args) == 1 and isinstance(args[0], list):
        return attrs, list(args[0])
    return attrs, list(args)


def m(selector: Any, *args: Any) -> Vnode:
    """Build a vnode from a selector, an optional attrs mapping and children.

    ``selector`` may be a CSS-like string (``"a#home.nav[href=/]"``), the
    fragment selector ``"["``, a component, or an existing vnode whose attrs
    and children are extended with the new ones.
    """

    attrs, children = _split_args(args)

    if isinstance(selector, Vnode):
        if isinstance(selector.tag, str):
            merged_attrs = _merge_element_attrs(selector.attrs, attrs)
            merged_children = _normalize_children(children)
        else:
            merged_attrs = {**selector.attrs, **attrs}
            merged_children = children
        return Vnode(
            tag=selector.tag,
            key=attrs.get("key", selector.key),
            attrs=merged_attrs,
            children=[*selector.children, *merged_children],
            text=selector.text,
        )
    if selector == FRAGMENT:
        return Vnode(tag=FRAGMENT, key=attrs.get("key"), attrs=attrs, children=_normalize_children(children))
    if isinstance(selector, str) and selector:
        return _exec_selector(selector, attrs, children)
    if is_component(selector):
        return Vnode(tag=selector, key=attrs.get("key"), attrs=attrs, children=children)
    raise TypeError(f"The selector must be a string, a component or a vnode, got {selector!r}")


def fragment(*args: Any) -> Vnode:
    return m(FRAGMENT, *args)


def trust(html: str | None) -> Vnode:
    """Mark ``html`` as already-safe markup that is emitted without escaping."""

    return Vnode(tag=TRUST, text=html or "")


__all__ = [
    "FRAGMENT",
    "TRUST",
    "Vnode",
    "fragment",
    "is_component",
    "is_vnode",
    "m",
    "trust",
]
