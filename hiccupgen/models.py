"""Pydantic models for HTML rendering configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .io_utils import read_yaml


class RenderOptions(BaseModel):
    """Options accepted by the HTML serializer."""

    strict: bool = Field(
        False, description="Close void elements XHTML-style (e.g. <br/>)."
    )
    xml: bool = Field(
        False, description="Self-close every element that renders no children."
    )
    escape_attribute: Optional[Callable[[str], str]] = Field(
        None,
        alias="escapeAttribute",
        description="Escaper for attribute values; defaults to html.escape with quotes.",
    )
    escape_string: Optional[Callable[[str], str]] = Field(
        None,
        alias="escapeString",
        description="Escaper for text content; defaults to html.escape without quotes.",
    )

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    @classmethod
    def coerce(cls, value: Any) -> "RenderOptions":
        """Accept ``None``, a mapping or an existing ``RenderOptions``."""

        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        return cls.model_validate(value)


def load_render_options(path: Path) -> RenderOptions:
    """Load render options from a YAML mapping."""

    try:
        data = read_yaml(path) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a mapping of render options.")
    try:
        return RenderOptions.model_validate(data)
    except ValidationError as exc:
        raise ValueError(f"Invalid render options in {path}: {exc}") from exc


__all__ = ["RenderOptions", "load_render_options"]
