"""Default CSS text rendering for resolved class tokens.

Callers with their own serializer pass a ``Renderer`` to the compiler.
This one writes a single flat rule per token and does not wrap variants
in pseudo-classes or at-rules.
"""

from __future__ import annotations

import re
from typing import Mapping, Protocol

from classcraft.model.parsed import ParsedClass

__all__ = ["Renderer", "escape_selector", "negate_value", "render_rule"]

_ESCAPE_RE = re.compile(r"([^a-zA-Z0-9_-])")


class Renderer(Protocol):
    def __call__(self, parsed: ParsedClass, properties: Mapping[str, str]) -> str: ...


def escape_selector(class_name: str) -> str:
    """Escape a class name for use in a CSS class selector."""
    escaped = _ESCAPE_RE.sub(r"\\\1", class_name)
    if escaped[:1].isdigit():
        escaped = f"\\3{escaped[0]} {escaped[1:]}"
    return escaped


def negate_value(value: str) -> str:
    """``1rem`` -> ``-1rem``; ``-2px`` -> ``2px``; ``0`` stays ``0``."""
    if value.startswith("-"):
        return value[1:]
    if value in ("0", "auto"):
        return value
    if value.startswith(("var(", "calc(")):
        return f"calc({value} * -1)"
    if value[:1].isdigit() or value.startswith("."):
        return f"-{value}"
    return value


def render_rule(parsed: ParsedClass, properties: Mapping[str, str]) -> str:
    suffix = " !important" if parsed.important else ""
    body = " ".join(f"{prop}: {value}{suffix};" for prop, value in properties.items())
    return f".{escape_selector(parsed.original)} {{ {body} }}"
