"""Rule model: Rule, CompiledRule, MatchResult and the handler protocol."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Mapping, Protocol, Union, runtime_checkable

Captures = tuple[str, ...]
PropertyMap = dict[str, str]


@runtime_checkable
class RuleHandler(Protocol):
    """Produces CSS declarations for a matched utility.

    ``captures`` is the full match followed by each capture group
    (unmatched groups are empty strings). ``theme`` is a read-only view.
    Returning None means the rule produces no CSS for these captures.
    """

    def generate(
        self, captures: Captures, theme: Mapping[str, Any]
    ) -> PropertyMap | None: ...


@dataclass(frozen=True)
class Rule:
    """A named matching unit supplied by a rule registry.

    A string pattern is a regular-expression source. Anchors are optional;
    the matcher always requires the whole utility to match.
    """

    pattern: Union[str, re.Pattern[str]]
    handler: RuleHandler | None = None
    priority: int = 0
    layer: str = "utilities"
    name: str | None = None

    @property
    def source(self) -> str:
        if isinstance(self.pattern, re.Pattern):
            return self.pattern.pattern
        return self.pattern


@dataclass(frozen=True)
class CompiledRule:
    """A Rule plus the fields derived from it at registration time."""

    rule: Rule
    name: str
    compiled: re.Pattern[str]
    prefix: str | None = None

    @property
    def priority(self) -> int:
        return self.rule.priority

    @property
    def layer(self) -> str:
        return self.rule.layer

    @property
    def handler(self) -> RuleHandler | None:
        return self.rule.handler

    @property
    def pattern(self) -> str:
        return self.compiled.pattern


@dataclass(frozen=True)
class MatchResult:
    """The rule that claimed a utility, with its regex match."""

    rule: CompiledRule
    match: re.Match[str]

    @property
    def captures(self) -> Captures:
        return (self.match.group(0),) + tuple(g or "" for g in self.match.groups())

    def generate(self, theme: Mapping[str, Any]) -> PropertyMap | None:
        """Run the rule handler against this match."""
        handler = self.rule.handler
        if handler is None:
            return None
        return handler.generate(self.captures, theme)
