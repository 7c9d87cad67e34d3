"""StaticHandler: the same declarations for every match."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from classcraft.model.rule import Captures, PropertyMap


@dataclass(frozen=True)
class StaticHandler:
    """Handler for keyword utilities such as ``flex`` or ``hidden``."""

    properties: Mapping[str, str] = field(default_factory=dict)

    def generate(self, captures: Captures, theme: Mapping[str, Any]) -> PropertyMap:
        return dict(self.properties)
