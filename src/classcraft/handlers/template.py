"""TemplateHandler: fills property templates from regex captures."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from classcraft.model.rule import Captures, PropertyMap
from classcraft.parser.classes import normalize_arbitrary_value

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TemplateHandler:
    """Formats each property template with ``str.format``.

    Positional fields refer to the captures (``{0}`` is the whole utility,
    ``{1}`` the first group). The ``{value}`` field is the first group
    (or the whole utility when the pattern has none), resolved through
    ``theme[theme_key]`` when a theme key is set. A value missing from
    that theme scale means no CSS. With ``arbitrary`` set, underscores in
    the value become spaces.

    A template that refers to a field the captures cannot fill also means
    no CSS for that utility; the rest of the class list still compiles.

        TemplateHandler({"padding": "{value}"}, theme_key="spacing")
    """

    properties: Mapping[str, str] = field(default_factory=dict)
    theme_key: str | None = None
    arbitrary: bool = False

    def generate(self, captures: Captures, theme: Mapping[str, Any]) -> PropertyMap | None:
        value = captures[1] if len(captures) > 1 else captures[0]
        if self.theme_key is not None:
            scale = theme.get(self.theme_key) or {}
            if value not in scale:
                return None
            value = str(scale[value])
        if self.arbitrary:
            value = normalize_arbitrary_value(value)
        try:
            return {
                prop: template.format(*captures, value=value)
                for prop, template in self.properties.items()
            }
        except (IndexError, KeyError, ValueError) as exc:
            logger.warning("Cannot fill template for %r: %s", captures[0], exc)
            return None
