"""classcraft model layer -- public type re-exports."""

from classcraft.model.diagnostic import Diagnostic, Severity
from classcraft.model.parsed import ParsedClass
from classcraft.model.rule import (
    Captures,
    CompiledRule,
    MatchResult,
    PropertyMap,
    Rule,
    RuleHandler,
)

__all__ = [
    # rule
    "Rule",
    "RuleHandler",
    "CompiledRule",
    "MatchResult",
    "Captures",
    "PropertyMap",
    # parsed
    "ParsedClass",
    # diagnostic
    "Severity",
    "Diagnostic",
]
