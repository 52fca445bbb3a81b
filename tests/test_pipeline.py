from __future__ import annotations

import asyncio

import pytest

from hiccupgen.hiccup import htm
from hiccupgen.pipeline import render_htm_to_html_string, render_htm_to_html_string_sync, to_vdom
from hiccupgen.vdom import m


def _render(node, options=None, **kwargs) -> str:
    return asyncio.run(render_htm_to_html_string(node, options, **kwargs))


def test_simple_structure() -> None:
    assert _render(["div", "Hello, World!"]) == "<div>Hello, World!</div>"


def test_structure_with_attributes() -> None:
    assert _render(["p", {"class": "greeting"}, "Welcome!"]) == '<p class="greeting">Welcome!</p>'


def test_nested_structure() -> None:
    html = _render(["div", ["h1", "Title"], ["p", "Content"]])
    assert html == "<div><h1>Title</h1><p>Content</p></div>"


def test_list_items() -> None:
    html = _render(["ul", ["li", "Item 1"], ["li", "Item 2"], ["li", "Item 3"]])
    assert html == "<ul><li>Item 1</li><li>Item 2</li><li>Item 3</li></ul>"


def test_components() -> None:
    component = {"view": lambda: m("span", "Component Content")}
    assert _render([component]) == "<span>Component Content</span>"


def test_function_components() -> None:
    def component(attrs, children):
        return m("span", "Function Component Content")

    assert _render([component]) == "<span>Function Component Content</span>"


def test_function_components_with_children() -> None:
    def component(attrs, children):
        return m("div", attrs, ["Prefix: ", *children])

    html = _render([component, {"class": "test"}, "Child 1", ["strong", "Child 2"]])
    assert html == '<div class="test">Prefix: Child 1<strong>Child 2</strong></div>'


def test_selector_shorthand() -> None:
    assert _render(["div#my-id.my-class", "Content"]) == '<div id="my-id" class="my-class">Content</div>'


def test_event_handlers_are_not_rendered() -> None:
    html = _render(["button", {"onclick": lambda event: None, "data-test": "value"}, "Click Me"])
    assert html == '<button data-test="value">Click Me</button>'


def test_svg() -> None:
    html = _render(["svg", {"width": "100", "height": "100"}, ["circle", {"cx": "50", "cy": "50", "r": "40"}]])
    assert html == '<svg width="100" height="100"><circle cx="50" cy="50" r="40"></circle></svg>'


def test_fragment_root() -> None:
    assert _render([None, "Hello", " ", "fragment!"]) == "Hello fragment!"


@pytest.mark.parametrize("node", [None, True, False, [], [[]]])
def test_blank_roots_render_empty(node) -> None:
    assert _render(node) == ""


def test_blank_roots_skip_serializer() -> None:
    calls = []

    async def serialize(view, options):
        calls.append(view)
        return "called"

    for node in (None, True, [], ()):
        assert _render(node, serialize=serialize) == ""
    assert calls == []


class TestSiblingRoots:
    def test_simple_siblings(self) -> None:
        html = _render([["div", "First div"], ["p", "Second paragraph"]])
        assert html == "<div>First div</div><p>Second paragraph</p>"

    def test_complex_siblings(self) -> None:
        html = _render(
            [
                ["div", {"id": "one"}, ["span", "Content One"]],
                ["article", ["h2", "Title"], ["p", "Text here"]],
            ]
        )
        assert html == '<div id="one"><span>Content One</span></div><article><h2>Title</h2><p>Text here</p></article>'

    def test_blank_siblings_contribute_nothing(self) -> None:
        assert _render([["div", "First"], None, [], ["p", "Last"]]) == "<div>First</div><p>Last</p>"

    def test_all_blank_siblings(self) -> None:
        assert _render([[], None, None]) == ""

    def test_fragment_siblings(self) -> None:
        html = _render([[None, "Frag1 ", ["em", "emph"]], ["", "Frag2"]])
        assert html == "Frag1 <em>emph</em>Frag2"

    def test_to_vdom_maps_each_root(self) -> None:
        assert to_vdom([["div"], ["p"]]) == [htm(["div"]), htm(["p"])]
        assert to_vdom(["div", ["p"]]) == htm(["div", ["p"]])


def test_options_are_forwarded() -> None:
    assert _render(["br"], {"strict": True}) == "<br/>"


def test_custom_construct_and_serialize() -> None:
    async def serialize(view, options):
        return f"{view}|{options}"

    html = _render(["b", "x"], {"o": 1}, construct=lambda head, attrs, children: head, serialize=serialize)
    assert html == "b|{'o': 1}"


def test_serializer_failures_are_logged_and_absorbed(capsys) -> None:
    def broken(attrs, children):
        raise RuntimeError("exploded")

    assert _render(["div", [broken]]) == ""
    err = capsys.readouterr().err
    assert "hiccupgen.render_htm_to_html_string" in err
    assert "RuntimeError: exploded" in err


def test_invalid_options_are_absorbed(capsys) -> None:
    assert _render(["p"], {"unknown": True}) == ""
    assert "Error during server-side rendering" in capsys.readouterr().err


def test_sync_wrapper() -> None:
    assert render_htm_to_html_string_sync(["p", "sync"]) == "<p>sync</p>"
