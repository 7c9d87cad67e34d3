"""Compiler: the class string -> CSS pipeline.

Owns one parser, one matcher and one cache and composes them:

    raw class string
      -> cache fast path (keyed by the raw string, stale once the theme
         or the rule set changes)
      -> expand variant groups -> parse tokens
      -> match each base utility -> rule handler -> renderer
      -> cache.set(raw string, css)

Tokens that no rule claims produce no CSS. They are reported as WARNING
diagnostics and TokenUnresolved events, never as exceptions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from classcraft.cache import CSSCache, CacheStats, hash_theme
from classcraft.config import CompilerConfig
from classcraft.events import CacheHit, CacheMiss, CSSGenerated, EventBus, TokenUnresolved
from classcraft.matcher import Matcher
from classcraft.model.diagnostic import Diagnostic, Severity
from classcraft.model.parsed import ParsedClass
from classcraft.model.rule import CompiledRule, MatchResult, Rule
from classcraft.parser import ClassParser
from classcraft.render import Renderer, negate_value, render_rule

__all__ = ["CompileResult", "Compiler", "ResolvedClass"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedClass:
    """A parsed token and the rule match for its base utility (None if unmatched)."""

    parsed: ParsedClass
    match: MatchResult | None

    @property
    def resolved(self) -> bool:
        return self.match is not None


@dataclass(frozen=True)
class CompileResult:
    """Output of one compile() call.

    ``resolved`` covers only the class strings that missed the cache.
    """

    css: str
    diagnostics: list[Diagnostic] = field(default_factory=list)
    resolved: list[ResolvedClass] = field(default_factory=list)

    @property
    def unresolved(self) -> list[str]:
        return [d.token for d in self.diagnostics if d.code == "unresolved" and d.token]


def _dedupe(items: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(items))


class Compiler:
    """Compiles utility class strings into CSS text."""

    def __init__(
        self,
        config: CompilerConfig | None = None,
        rules: Iterable[Rule] = (),
        theme: Mapping[str, Any] | None = None,
        renderer: Renderer | None = None,
        bus: EventBus | None = None,
    ) -> None:
        self.config = config or CompilerConfig()
        self.bus = bus or EventBus()
        self.renderer: Renderer = renderer or render_rule
        self.parser = ClassParser(max_class_length=self.config.max_class_length)
        self.matcher = Matcher(strict=self.config.strict_rule_names)
        cache_opts = self.config.cache
        self.cache = CSSCache(
            max_size=cache_opts.max_size, ttl=cache_opts.ttl, enabled=cache_opts.enabled
        )
        self._theme: Mapping[str, Any] = MappingProxyType(dict(theme or {}))
        self._theme_hash = hash_theme(self._theme)
        self._rules_generation = 0
        self.matcher.add_rules(rules)
        self.cache.set_theme_version(self._cache_version())

    # --- rules & theme ------------------------------------------------------

    def add_rule(self, rule: Rule) -> CompiledRule:
        compiled = self.matcher.add_rule(rule)
        self._rules_changed()
        return compiled

    def add_rules(self, rules: Iterable[Rule]) -> None:
        try:
            self.matcher.add_rules(rules)
        finally:
            # a strict-name failure midway still leaves earlier rules registered
            self._rules_changed()

    def remove_rule(self, name: str) -> bool:
        removed = self.matcher.remove_rule(name)
        if removed:
            self._rules_changed()
        return removed

    def _cache_version(self) -> str:
        return f"{self._theme_hash}.{self._rules_generation}"

    def _rules_changed(self) -> None:
        # Cached CSS was rendered against the old rule set
        self._rules_generation += 1
        self.cache.set_theme_version(self._cache_version())

    @property
    def theme(self) -> Mapping[str, Any]:
        return self._theme

    def set_theme(self, theme: Mapping[str, Any], *, eager: bool = False) -> None:
        """Replace the theme.

        Cached CSS from the previous theme goes stale lazily, or is wiped
        immediately when *eager* is set.
        """
        self._theme = MappingProxyType(dict(theme))
        self._theme_hash = hash_theme(self._theme)
        version = self._cache_version()
        if eager:
            self.cache.clear_with_version(version)
        else:
            self.cache.set_theme_version(version)

    # --- pipeline -----------------------------------------------------------

    def resolve(self, class_string: str) -> list[ResolvedClass]:
        """Parse a raw class string and match each token, without generating CSS."""
        if self.config.variant_groups:
            parsed = self.parser.parse_class_list(class_string)
        else:
            parsed = self.parser.parse_classes(class_string)
        return [ResolvedClass(parsed=p, match=self.matcher.match(p.utility)) for p in parsed]

    def compile(self, classes: Iterable[str]) -> CompileResult:
        """Generate CSS for *classes*, collecting diagnostics for unresolved tokens."""
        raw_classes = [c for c in _dedupe(classes) if c not in self.config.blocklist]
        chunks: list[str] = []
        diagnostics: list[Diagnostic] = []
        resolved: list[ResolvedClass] = []

        for raw in raw_classes:
            cached = self.cache.get(raw)
            if cached is not None:
                self.bus.emit(CacheHit(class_name=raw))
                chunks.append(cached)
                continue

            self.bus.emit(CacheMiss(class_name=raw))
            items = self.resolve(raw)
            resolved.extend(items)
            css = self._render(items, diagnostics)
            if css:
                self.cache.set(raw, css)
                chunks.append(css)

        css = "\n".join(_dedupe(chunks))
        self.bus.emit(CSSGenerated(classes=tuple(raw_classes), css=css))
        return CompileResult(css=css, diagnostics=diagnostics, resolved=resolved)

    def generate(self, classes: Iterable[str]) -> str:
        return self.compile(classes).css

    def _render(self, items: list[ResolvedClass], diagnostics: list[Diagnostic]) -> str:
        parts: list[str] = []
        for item in items:
            parsed = item.parsed
            if item.match is None:
                logger.warning("No rule matches %r", parsed.original)
                self.bus.emit(TokenUnresolved(token=parsed.original, utility=parsed.utility))
                diagnostics.append(
                    Diagnostic(
                        code="unresolved",
                        severity=Severity.WARNING,
                        message=f"No rule matches utility {parsed.utility!r}.",
                        token=parsed.original,
                        fix="Check the spelling or register a rule for it.",
                    )
                )
                continue

            properties = item.match.generate(self._theme)
            if not properties:
                diagnostics.append(
                    Diagnostic(
                        code="empty",
                        severity=Severity.INFO,
                        message=(
                            f"Rule {item.match.rule.name!r} produced no declarations "
                            f"for {parsed.utility!r}."
                        ),
                        token=parsed.original,
                    )
                )
                continue
            if parsed.negative:
                properties = {k: negate_value(v) for k, v in properties.items()}
            parts.append(self.renderer(parsed, properties))
        return "\n".join(parts)

    # --- housekeeping -------------------------------------------------------

    def cache_stats(self) -> CacheStats:
        return self.cache.stats()

    def clear_cache(self) -> None:
        self.cache.clear()

    def reset(self) -> None:
        """Drop every rule and all cached CSS, keeping the current theme."""
        self.matcher.clear()
        self._rules_generation += 1
        self.cache.clear_with_version(self._cache_version())
