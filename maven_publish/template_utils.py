"""Template helpers used to render the XML descriptors."""

from __future__ import annotations

import typing as typ
from importlib import resources

from .errors import LocalIOError, PublishError

__all__ = ["Renderer", "load_template", "render_template"]

Renderer = typ.Callable[[str, typ.Mapping[str, str]], str]
"""Callable rendering a named template with a context mapping."""

_TEMPLATE_PACKAGE = "maven_publish"
_TEMPLATE_DIR = "templates"


def load_template(name: str) -> str:
    """Return the text of the bundled template ``name``."""

    source = resources.files(_TEMPLATE_PACKAGE) / _TEMPLATE_DIR / name
    try:
        return source.read_text(encoding="utf-8")
    except OSError as exc:
        message = f"Cannot read template '{name}': {exc}"
        raise LocalIOError(message) from exc


def render_template(name: str, context: typ.Mapping[str, str]) -> str:
    """Return the bundled template ``name`` formatted with ``context``."""

    template = load_template(name)
    try:
        return template.format(**context)
    except KeyError as exc:
        message = f"Invalid template key {exc} in '{name}'"
        raise PublishError(message) from exc
