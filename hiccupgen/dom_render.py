"""Server-side HTML serialization of vnode trees."""

from __future__ import annotations

import html
import inspect
import re
from collections.abc import Mapping
from typing import Any, Callable, List

from .models import RenderOptions
from .vdom import FRAGMENT, TRUST, Vnode, is_component, m

VOID_ELEMENTS = frozenset(
    "area base br col embed hr img input keygen link meta param source track wbr".split()
)
LIFECYCLE_HOOKS = frozenset(
    ["oninit", "oncreate", "onbeforeupdate", "onupdate", "onbeforeremove", "onremove"]
)
UPPERCASE_RE = re.compile(r"[A-Z]")


def _escape_text(text: str) -> str:
    return html.escape(text, quote=False)


def _escape_attribute(value: str) -> str:
    return html.escape(value, quote=True)


def _css_property(name: str) -> str:
    if name.startswith("--"):
        return name
    return UPPERCASE_RE.sub(lambda match: "-" + match.group(0).lower(), name)


def _style_to_css(style: Mapping) -> str:
    parts = [
        f"{_css_property(name)}:{value}"
        for name, value in style.items()
        if value is not None and value is not False
    ]
    return ";".join(parts)


def _omit_attribute(name: str, value: Any) -> bool:
    if value is None or value is False:
        return True
    if name == "key" or name in LIFECYCLE_HOOKS:
        return True
    return callable(value)


def _accepts_argument(fn: Callable[..., Any]) -> bool:
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        return False
    positional = (
        inspect.Parameter.POSITIONAL_ONLY,
        inspect.Parameter.POSITIONAL_OR_KEYWORD,
        inspect.Parameter.VAR_POSITIONAL,
    )
    return any(param.kind in positional for param in signature.parameters.values())


def _call_with_vnode(fn: Callable[..., Any], vnode: Vnode) -> Any:
    if _accepts_argument(fn):
        return fn(vnode)
    return fn()


def _hook(state: Any, name: str) -> Any:
    if isinstance(state, Mapping):
        return state.get(name)
    return getattr(state, name, None)


async def _resolve(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


class _HtmlRenderer:
    def __init__(self, options: RenderOptions) -> None:
        self.options = options
        self.escape_string = options.escape_string or _escape_text
        self.escape_attribute = options.escape_attribute or _escape_attribute

    async def render(self, view: Any) -> str:
        if view is None or isinstance(view, bool):
            return ""
        if hasattr(view, "__html__"):
            # Objects following the markupsafe protocol are already escaped.
            return view.__html__()
        if isinstance(view, str):
            return self.escape_string(view)
        if isinstance(view, float) and view.is_integer():
            return self.escape_string(str(int(view)))
        if isinstance(view, (int, float)):
            return self.escape_string(str(view))
        if isinstance(view, (list, tuple)):
            parts: List[str] = []
            for item in view:
                parts.append(await self.render(item))
            return "".join(parts)
        if isinstance(view, Vnode):
            return await self.render_vnode(view)
        if is_component(view):
            return await self.render_component(m(view))
        return self.escape_string(str(view))

    async def render_vnode(self, vnode: Vnode) -> str:
        tag = vnode.tag
        if isinstance(tag, str):
            if tag == FRAGMENT:
                return await self.render(vnode.children)
            if tag == TRUST:
                return vnode.text or ""
            return await self.render_element(vnode)
        return await self.render_component(vnode)

    def render_attrs(self, attrs: Mapping) -> str:
        parts: List[str] = []
        for name, value in attrs.items():
            if _omit_attribute(name, value):
                continue
            if name == "className":
                name = "class"
            if value is True:
                parts.append(name)
                continue
            if name == "style" and isinstance(value, Mapping):
                value = _style_to_css(value)
                if not value:
                    continue
            parts.append(f'{name}="{self.escape_attribute(str(value))}"')
        if not parts:
            return ""
        return " " + " ".join(parts)

    async def render_element(self, vnode: Vnode) -> str:
        tag = vnode.tag
        attrs = self.render_attrs(vnode.attrs)
        if tag.lower() in VOID_ELEMENTS:
            closing = "/" if self.options.strict else ""
            return f"<{tag}{attrs}{closing}>"
        inner = await self.render(vnode.children)
        if not inner and self.options.xml:
            return f"<{tag}{attrs}/>"
        return f"<{tag}{attrs}>{inner}</{tag}>"

    async def render_component(self, vnode: Vnode) -> str:
        component = vnode.tag
        if isinstance(component, type):
            state = _call_with_vnode(component, vnode)
        else:
            state = component

        oninit = _hook(state, "oninit")
        if callable(oninit):
            await _resolve(_call_with_vnode(oninit, vnode))

        view = _hook(state, "view")
        if not callable(view):
            raise TypeError(f"Component {component!r} has no callable view")
        result = await _resolve(_call_with_vnode(view, vnode))
        return await self.render(result)


async def render_to_string(view: Any, options: RenderOptions | Mapping | None = None) -> str:
    """Render a vnode, a list of roots or a primitive to an HTML string.

    ``None`` and booleans render nothing. Component errors propagate.
    """

    renderer = _HtmlRenderer(RenderOptions.coerce(options))
    return await renderer.render(view)


__all__ = ["VOID_ELEMENTS", "render_to_string"]
