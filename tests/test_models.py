from pathlib import Path

import pytest
from pydantic import ValidationError

from hiccupgen.models import RenderOptions, load_render_options


def test_defaults() -> None:
    options = RenderOptions()
    assert options.strict is False
    assert options.xml is False
    assert options.escape_attribute is None
    assert options.escape_string is None


def test_camel_case_aliases() -> None:
    options = RenderOptions.model_validate({"escapeString": str.upper, "strict": True})
    assert options.escape_string is str.upper
    assert options.strict is True


def test_unknown_keys_are_rejected() -> None:
    with pytest.raises(ValidationError):
        RenderOptions.model_validate({"pretty": True})


def test_coerce() -> None:
    options = RenderOptions(xml=True)
    assert RenderOptions.coerce(options) is options
    assert RenderOptions.coerce(None) == RenderOptions()
    assert RenderOptions.coerce({"xml": True}).xml is True


def test_load_render_options(tmp_path: Path) -> None:
    path = tmp_path / "render.yaml"
    path.write_text("strict: true\nxml: false\n", encoding="utf-8")
    options = load_render_options(path)
    assert options.strict is True
    assert options.xml is False


def test_empty_file_yields_defaults(tmp_path: Path) -> None:
    path = tmp_path / "render.yaml"
    path.write_text("", encoding="utf-8")
    assert load_render_options(path) == RenderOptions()


@pytest.mark.parametrize(
    "content",
    [
        "- strict\n",
        "strict: [unclosed\n",
        "strict: sometimes\n",
        "colour: blue\n",
    ],
)
def test_invalid_files_raise_value_error(tmp_path: Path, content: str) -> None:
    path = tmp_path / "render.yaml"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ValueError):
        load_render_options(path)
