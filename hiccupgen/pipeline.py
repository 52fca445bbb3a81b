"""Rendering pipeline from hiccup structures to HTML strings."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Any, Awaitable, Callable

from .dom_render import render_to_string
from .hiccup import Construct, htm
from .io_utils import warn
from .models import RenderOptions
from .vdom import m

Serialize = Callable[[Any, Any], Awaitable[str]]

LOG_PREFIX = "hiccupgen.render_htm_to_html_string"


def _is_blank(value: Any) -> bool:
    return value is None or isinstance(value, bool)


def _is_sibling_list(node: Any) -> bool:
    # [['div'], ['p']] is two roots while ['div', ['p']] is one root with a
    # child; only the shape of the first item tells them apart.
    return isinstance(node, (list, tuple)) and len(node) > 0 and isinstance(node[0], (list, tuple))


def to_vdom(node: Any, construct: Construct = m) -> Any:
    """Normalize a single hiccup root or a list of sibling roots."""

    if _is_sibling_list(node):
        return [htm(item, construct) for item in node]
    return htm(node, construct)


async def render_htm_to_html_string(
    node: Any,
    options: RenderOptions | Mapping | None = None,
    *,
    construct: Construct = m,
    serialize: Serialize = render_to_string,
) -> str:
    """Render hiccup to HTML, returning an empty string when rendering fails.

    ``None``, booleans and structures that normalize to nothing produce ``""``
    without calling ``serialize``. Failures are reported on stderr.
    """

    if _is_blank(node):
        return ""

    vdom_root = to_vdom(node, construct)
    if _is_blank(vdom_root):
        return ""

    try:
        return await serialize(vdom_root, options)
    except Exception as exc:
        warn(f"{LOG_PREFIX}: Error during server-side rendering: {type(exc).__name__}: {exc}")
        return ""


def render_htm_to_html_string_sync(
    node: Any,
    options: RenderOptions | Mapping | None = None,
    **kwargs: Any,
) -> str:
    """Blocking wrapper around :func:`render_htm_to_html_string`."""

    return asyncio.run(render_htm_to_html_string(node, options, **kwargs))


__all__ = ["render_htm_to_html_string", "render_htm_to_html_string_sync", "to_vdom"]
