"""FunctionHandler: adapts a plain callable to the handler protocol."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping

from classcraft.model.rule import Captures, PropertyMap


@dataclass(frozen=True)
class FunctionHandler:
    fn: Callable[[Captures, Mapping[str, Any]], PropertyMap | None]

    def generate(self, captures: Captures, theme: Mapping[str, Any]) -> PropertyMap | None:
        return self.fn(captures, theme)
