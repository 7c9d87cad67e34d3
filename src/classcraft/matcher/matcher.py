"""Rule matcher: resolves a base utility to the best-matching rule.

Rules are tried in descending priority; rules of equal priority keep
their registration order. Two derived structures speed this up and are
rebuilt lazily, together, the first time ``match`` needs them after the
rule set changes:

- the priority-sorted rule list
- a prefix index mapping the leading literal word of a pattern
  (``p`` for ``^p-(\\d+)$``) to the sorted rules sharing it

When a utility's own leading word has a bucket, only that bucket is
scanned; otherwise the full sorted list is. The index only narrows the
candidates. The anchored full-pattern test decides the match.

Results, including misses, are memoized per utility string until the
rule set changes.
"""

from __future__ import annotations

import logging
import re
import threading
from typing import Iterable

from classcraft.errors import DuplicateRuleError, InvalidRuleError
from classcraft.model.rule import CompiledRule, MatchResult, Rule

__all__ = [
    "Matcher",
    "anchor_pattern",
    "extract_pattern_prefix",
    "extract_utility_prefix",
    "generate_rule_name",
]

logger = logging.getLogger(__name__)

# Leading literal word of a pattern source, optionally after "^".
_PATTERN_PREFIX_RE = re.compile(r"^\^?([a-zA-Z][a-zA-Z0-9]*)[^a-zA-Z0-9]")
# Leading literal word of a utility, which must be followed by something.
_UTILITY_PREFIX_RE = re.compile(r"^([a-zA-Z][a-zA-Z0-9]*)[^a-zA-Z0-9]")
_METACHARS_RE = re.compile(r"[\^$\\\[\](){}|+*?.]")
_INLINE_FLAGS_RE = re.compile(r"^\(\?[aiLmsux]+\)")

_MAX_GENERATED_NAME = 40


def anchor_pattern(pattern: str | re.Pattern[str]) -> re.Pattern[str]:
    """Compile *pattern* so that it only ever matches a whole utility."""
    if isinstance(pattern, re.Pattern):
        source, flags = pattern.pattern, pattern.flags
    else:
        source, flags = pattern, 0
    # Global inline flags must stay at the very start of the expression
    inline = _INLINE_FLAGS_RE.match(source)
    head = inline.group(0) if inline else ""
    body = source[len(head):]
    if flags & re.VERBOSE or "x" in head:
        # a trailing "# comment" would otherwise swallow the closing group
        body += "\n"
    try:
        return re.compile(rf"{head}^(?:{body})$", flags)
    except re.error as exc:
        raise InvalidRuleError(
            f"Invalid rule pattern {source!r}: {exc}", pattern=source, cause=exc
        ) from exc


def extract_pattern_prefix(source: str) -> str | None:
    """``^p-(\\d+)$`` -> ``p``; ``^bg-`` -> ``bg``; ``^(m|p)-`` -> None."""
    m = _PATTERN_PREFIX_RE.match(source)
    return m.group(1) if m else None


def extract_utility_prefix(utility: str) -> str | None:
    """``p-4`` -> ``p``; ``bg-red-500`` -> ``bg``; ``flex`` -> None."""
    m = _UTILITY_PREFIX_RE.match(utility)
    return m.group(1) if m else None


def generate_rule_name(source: str) -> str:
    """Derive a rule name from a pattern source by stripping regex syntax."""
    return _METACHARS_RE.sub("", source)[:_MAX_GENERATED_NAME] or "anonymous"


class Matcher:
    """Mutable rule set with priority-ordered, prefix-indexed matching.

    Registering a rule under an existing name replaces it (last write
    wins) unless the matcher is strict, in which case DuplicateRuleError
    is raised. All public methods hold a single lock, so one instance may
    be shared between threads.
    """

    def __init__(self, rules: Iterable[Rule] = (), *, strict: bool = False) -> None:
        self.strict = strict
        self._lock = threading.Lock()
        self._rules: dict[str, CompiledRule] = {}
        self._sorted: list[CompiledRule] | None = None
        self._prefix_index: dict[str, list[CompiledRule]] = {}
        self._match_cache: dict[str, MatchResult | None] = {}
        self.add_rules(rules)

    # --- registration -------------------------------------------------------

    def add_rule(self, rule: Rule) -> CompiledRule:
        """Compile and register *rule*, returning its compiled form."""
        source = rule.source
        compiled = CompiledRule(
            rule=rule,
            name=rule.name or generate_rule_name(source),
            compiled=anchor_pattern(rule.pattern),
            prefix=extract_pattern_prefix(source),
        )
        with self._lock:
            if self.strict and rule.name and rule.name in self._rules:
                raise DuplicateRuleError(rule.name)
            self._rules[compiled.name] = compiled
            self._invalidate()
        logger.debug(
            "Registered rule %s (priority=%d, prefix=%s)",
            compiled.name,
            compiled.priority,
            compiled.prefix,
        )
        return compiled

    def add_rules(self, rules: Iterable[Rule]) -> None:
        for rule in rules:
            self.add_rule(rule)

    def remove_rule(self, name: str) -> bool:
        """Remove a rule by name. Returns whether anything was removed."""
        with self._lock:
            if self._rules.pop(name, None) is None:
                return False
            self._invalidate()
            return True

    def clear(self) -> bool:
        """Remove every rule. Returns whether anything was removed."""
        with self._lock:
            had_rules = bool(self._rules)
            self._rules.clear()
            self._invalidate()
            return had_rules

    # --- lookup -------------------------------------------------------------

    def get_rule(self, name: str) -> CompiledRule | None:
        with self._lock:
            return self._rules.get(name)

    def has_rule(self, name: str) -> bool:
        with self._lock:
            return name in self._rules

    def rules(self) -> list[CompiledRule]:
        """All rules in registration order."""
        with self._lock:
            return list(self._rules.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._rules)

    def __contains__(self, name: str) -> bool:
        return self.has_rule(name)

    # --- matching -----------------------------------------------------------

    def match(self, utility: str) -> MatchResult | None:
        """Return the highest-priority rule matching *utility*, or None."""
        with self._lock:
            if utility in self._match_cache:
                return self._match_cache[utility]

            sorted_rules = self._sorted_rules()
            prefix = extract_utility_prefix(utility)
            candidates = self._prefix_index.get(prefix, sorted_rules) if prefix else sorted_rules

            result: MatchResult | None = None
            for rule in candidates:
                m = rule.compiled.fullmatch(utility)
                if m is not None:
                    result = MatchResult(rule=rule, match=m)
                    break

            self._match_cache[utility] = result
            return result

    def match_all(self, utilities: Iterable[str]) -> dict[str, MatchResult | None]:
        return {utility: self.match(utility) for utility in utilities}

    # --- derived state ------------------------------------------------------

    def _invalidate(self) -> None:
        self._sorted = None
        self._match_cache.clear()

    def _sorted_rules(self) -> list[CompiledRule]:
        """Priority-sorted rules; rebuilds the prefix index alongside. Lock held."""
        if self._sorted is None:
            # sorted() is stable, so equal priorities keep registration order
            self._sorted = sorted(self._rules.values(), key=lambda r: -r.priority)
            index: dict[str, list[CompiledRule]] = {}
            for rule in self._sorted:
                if rule.prefix:
                    index.setdefault(rule.prefix, []).append(rule)
            self._prefix_index = index
            logger.debug(
                "Rebuilt rule index: %d rules, %d prefixes", len(self._sorted), len(index)
            )
        return self._sorted
